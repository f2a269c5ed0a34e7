# magma/utils.py
import secrets
import numpy as np
from .params import DTYPE, HALF_SIZE, KEY_SIZE

_BE_SHIFTS = np.array([24, 16, 8, 0], dtype=np.uint64)
MASK32 = np.uint64(0xFFFFFFFF)

def be_words(x: np.ndarray) -> np.ndarray:
    """Big-endian uint32 value of each 4-byte row, widened to uint64."""
    assert x.shape[-1] == HALF_SIZE, f"Expected last axis {HALF_SIZE}, got {x.shape}"
    return np.bitwise_or.reduce(x.astype(np.uint64) << _BE_SHIFTS, axis=-1)

def words_to_be(w: np.ndarray) -> np.ndarray:
    return ((np.asarray(w)[..., None] >> _BE_SHIFTS) & np.uint64(0xFF)).astype(DTYPE)

def add_mod32(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return (be_words(a) + be_words(b)) & MASK32

def rotl8(x: np.ndarray, bits: int) -> np.ndarray:
    bits %= 8
    x = x.astype(DTYPE)
    if bits == 0:
        return x
    return (((x << bits) | (x >> (8 - bits))) & 0xFF).astype(DTYPE)

def bytes_xor(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.bitwise_xor(a, b).astype(DTYPE)

def split_block(block: np.ndarray):
    return block[..., :HALF_SIZE], block[..., HALF_SIZE:]

def combine_halves(left: np.ndarray, right: np.ndarray) -> np.ndarray:
    return np.concatenate([left, right], axis=-1)

def as_array(data: bytes) -> np.ndarray:
    return np.frombuffer(bytes(data), dtype=DTYPE).copy()

def generate_key() -> bytes:
    return secrets.token_bytes(KEY_SIZE)
