import logging
import numpy as np
from dataclasses import dataclass, field
from .params import DTYPE, KEY_SIZE, HALF_SIZE, FRAGMENTS, ROUNDS
from .errors import InvalidKeyLength

logger = logging.getLogger(__name__)

# -----------------------------
# Round key order
# -----------------------------
# K0..K7 K0..K7 K0..K7 K7..K0
ENCRYPT_ORDER = np.array(
    list(range(FRAGMENTS)) * 3 + list(reversed(range(FRAGMENTS))),
    dtype=np.int64,
)
# K0..K7 K7..K0 K7..K0 K7..K0
DECRYPT_ORDER = ENCRYPT_ORDER[::-1].copy()
ENCRYPT_ORDER.setflags(write=False)
DECRYPT_ORDER.setflags(write=False)

assert ENCRYPT_ORDER.shape == (ROUNDS,) and DECRYPT_ORDER.shape == (ROUNDS,)

@dataclass(frozen=True, eq=False)
class MagmaKey:
    raw: bytes = field(repr=False)
    fragments: np.ndarray = field(repr=False)          # (8, 4) K0..K7
    encrypt_schedule: np.ndarray = field(repr=False)   # (32, 4)
    decrypt_schedule: np.ndarray = field(repr=False)   # (32, 4)

    def fragment(self, index: int) -> np.ndarray:
        return self.fragments[index]

def split_fragments(key: bytes) -> np.ndarray:
    fragments = np.frombuffer(key, dtype=DTYPE).reshape(FRAGMENTS, HALF_SIZE)
    return fragments

def schedule(fragments: np.ndarray, order: np.ndarray) -> np.ndarray:
    assert fragments.shape == (FRAGMENTS, HALF_SIZE), f"Fragment table shape mismatch: expected {(FRAGMENTS, HALF_SIZE)}, got {fragments.shape}"
    out = fragments[order]
    out.setflags(write=False)
    return out

def key_from_bytes(key: bytes) -> MagmaKey:
    key = bytes(key)
    if len(key) != KEY_SIZE:
        raise InvalidKeyLength(len(key))
    fragments = split_fragments(key)
    logger.debug("Derived %d-round key schedules", ROUNDS)
    return MagmaKey(
        raw=key,
        fragments=fragments,
        encrypt_schedule=schedule(fragments, ENCRYPT_ORDER),
        decrypt_schedule=schedule(fragments, DECRYPT_ORDER),
    )
