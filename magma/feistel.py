import logging
import numpy as np
from .params import HALF_SIZE, BLOCK_SIZE, ROTATION
from .sbox import substitute_nibbles
from .utils import add_mod32, words_to_be, rotl8, bytes_xor, split_block, combine_halves

logger = logging.getLogger(__name__)

# Byte i uses rows i (high nibble) and i + 1 (low nibble)
HIGH_ROWS = np.arange(HALF_SIZE)
LOW_ROWS = np.arange(1, HALF_SIZE + 1)

# -----------------------------
# Round Mixing Function
# -----------------------------
def round_function(half: np.ndarray, key_fragment: np.ndarray) -> np.ndarray:
    """
    Mix a 4-byte half-block with a 4-byte round key fragment.

    The sum (mod 2^32, big-endian) is substituted nibble by nibble through two
    adjacent table rows per byte, then every byte is rotated left by ROTATION
    bits on its own. Works on any stack of halves shaped (..., 4).
    """
    assert half.shape[-1] == HALF_SIZE, f"Expected half-block of {HALF_SIZE} bytes, got {half.shape}"
    assert key_fragment.shape == (HALF_SIZE,), f"Expected key fragment shape {(HALF_SIZE,)}, got {key_fragment.shape}"
    summed = words_to_be(add_mod32(half, key_fragment))
    high = substitute_nibbles(HIGH_ROWS, summed >> 4)
    low = substitute_nibbles(LOW_ROWS, summed & 0x0F)
    return rotl8((high << 4) | low, ROTATION)

# -----------------------------
# Feistel Round
# -----------------------------
def feistel_round(block: np.ndarray, key_fragment: np.ndarray, last: bool = False) -> np.ndarray:
    assert block.shape[-1] == BLOCK_SIZE, f"Expected block of {BLOCK_SIZE} bytes, got {block.shape}"
    left, right = split_block(block)
    new_left = bytes_xor(left, round_function(right, key_fragment))
    if logger.isEnabledFor(logging.DEBUG) and block.ndim == 1:
        logger.debug("round: L=%s R=%s -> L'=%s", left.tobytes().hex(), right.tobytes().hex(), new_left.tobytes().hex())
    if last:
        return combine_halves(new_left, right)
    return combine_halves(right, new_left)
