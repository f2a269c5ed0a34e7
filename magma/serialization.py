import re
import numpy as np
from .params import DTYPE, BLOCK_SIZE, TEXT_SEPARATOR, BYTE_TEXT_PATTERN
from .errors import Ok, Err, ParseFailure, Result

_BYTE_TEXT_RE = re.compile(BYTE_TEXT_PATTERN)

# -----------------------------
# Block Helpers
# -----------------------------
def bytes_to_blocks(b: bytes) -> np.ndarray:
    assert len(b) % BLOCK_SIZE == 0, f"Buffer of {len(b)} bytes is not block aligned"
    return np.frombuffer(bytes(b), dtype=DTYPE).reshape(-1, BLOCK_SIZE).copy()

def blocks_to_bytes(x: np.ndarray) -> bytes:
    return x.astype(DTYPE).tobytes()

# -----------------------------
# Text Codec
# -----------------------------
def bytes_to_text(data: bytes) -> str:
    """Render bytes as decimal values joined by ", " (b"\\x01\\x02\\xff" -> "1, 2, 255")."""
    return TEXT_SEPARATOR.join(str(b) for b in bytes(data))

def _parse_byte(token: str) -> int:
    if not (token.isascii() and token.isdigit()):
        raise ParseFailure(token)
    value = int(token)
    if value > 0xFF:
        raise ParseFailure(token)
    return value

def text_to_bytes(text: str) -> Result[bytes]:
    if text == "":
        return Ok(b"")
    out = bytearray()
    for token in text.split(TEXT_SEPARATOR):
        try:
            out.append(_parse_byte(token))
        except ParseFailure as e:
            return Err(e)
    return Ok(bytes(out))

def is_byte_text(text: str) -> bool:
    """Caller-side shape check: digits, whitespace and commas only."""
    return _BYTE_TEXT_RE.match(text) is not None
