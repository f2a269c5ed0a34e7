# magma/permutation.py
import numpy as np
from .params import BLOCK_SIZE, ROUNDS
from .key_schedule import MagmaKey
from .feistel import feistel_round
from .utils import as_array

# -----------------------------
# Block Cipher (32 Feistel rounds)
# -----------------------------
def _run_rounds(x: np.ndarray, round_keys: np.ndarray) -> np.ndarray:
    assert x.shape[-1] == BLOCK_SIZE, f"Expected blocks of {BLOCK_SIZE} bytes, got {x.shape}"
    assert round_keys.shape[0] == ROUNDS, f"Expected {ROUNDS} round keys, got {round_keys.shape}"
    y = x.copy()
    for r in range(ROUNDS):
        y = feistel_round(y, round_keys[r], last=(r == ROUNDS - 1))
    return y

def encrypt_blocks(x: np.ndarray, key: MagmaKey) -> np.ndarray:
    """Encrypt a stack of independent blocks shaped (..., 8)."""
    return _run_rounds(x, key.encrypt_schedule)

def decrypt_blocks(x: np.ndarray, key: MagmaKey) -> np.ndarray:
    """Decrypt a stack of independent blocks shaped (..., 8)."""
    return _run_rounds(x, key.decrypt_schedule)

def encrypt_block(block: bytes, key: MagmaKey) -> bytes:
    return encrypt_blocks(as_array(block), key).tobytes()

def decrypt_block(block: bytes, key: MagmaKey) -> bytes:
    return decrypt_blocks(as_array(block), key).tobytes()
