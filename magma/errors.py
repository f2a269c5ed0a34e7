# magma/errors.py
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union
from .params import BLOCK_SIZE, KEY_SIZE

T = TypeVar("T")

# -----------------------------
# Exceptions
# -----------------------------
class MagmaError(ValueError):
    """Base class for all cipher boundary errors."""

class InvalidLength(MagmaError):
    """Raised when a buffer is not a whole number of blocks."""

    def __init__(self, actual: int, multiple: int = BLOCK_SIZE):
        self.actual = actual
        self.multiple = multiple
        super().__init__(f"Input length must be a multiple of {multiple} bytes. Current length: {actual} bytes")

class InvalidKeyLength(InvalidLength):
    """Raised when a key is not exactly KEY_SIZE bytes."""

    def __init__(self, actual: int):
        self.actual = actual
        self.multiple = KEY_SIZE
        MagmaError.__init__(self, f"Key must be exactly {KEY_SIZE} bytes. Current length: {actual} bytes")

class ParseFailure(MagmaError):
    """Raised when a text token is not a decimal byte value."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Cannot parse byte value from token {token!r}")

class InvalidUtf8(MagmaError):
    """Raised when decrypted bytes cannot be shown as text."""

    def __init__(self, data: bytes):
        self.data = data
        super().__init__(f"Decrypted {len(data)} bytes are not valid UTF-8 text")

# -----------------------------
# Result type
# -----------------------------
@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value

@dataclass(frozen=True)
class Err:
    error: MagmaError

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise self.error

    def unwrap_or(self, default: Any) -> Any:
        return default

Result = Union[Ok[T], Err]
