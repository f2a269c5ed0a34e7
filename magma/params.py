# magma/params.py
from dataclasses import dataclass
from typing import Union
import numpy as np

# -----------------------------
# CLI Colors
# -----------------------------
class bcolors:
    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    GREY = '\033[90m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    UNDERLINE = '\033[4m'

BLOCK_SIZE = 8         # bytes per block
HALF_SIZE = BLOCK_SIZE // 2
KEY_SIZE = 32          # bytes per key
FRAGMENTS = KEY_SIZE // HALF_SIZE
ROUNDS = 32
ROTATION = 11          # applied per byte, so 3 bits effective
DTYPE = np.uint8

TEXT_SEPARATOR = ", "
BYTE_TEXT_PATTERN = r"^[0-9\s,]+$"
DEFAULT_KEY = "SECRET_KEY_WITH_LENGTH_32_BYTES_"

@dataclass
class MagmaParams:
    key: Union[str, bytes] = DEFAULT_KEY
    encoding: str = "utf-8"

