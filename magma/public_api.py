# magma/public_api.py
import logging
from typing import Optional, Union
from .params import BLOCK_SIZE, MagmaParams
from .errors import Ok, Err, Result, InvalidLength, InvalidKeyLength, InvalidUtf8, ParseFailure
from .key_schedule import MagmaKey, key_from_bytes
from .permutation import encrypt_blocks, decrypt_blocks
from .serialization import bytes_to_blocks, blocks_to_bytes, bytes_to_text, text_to_bytes, is_byte_text

logger = logging.getLogger(__name__)

KeyLike = Union[str, bytes, bytearray, MagmaKey]

def prepare_key(key: KeyLike, encoding: str = "utf-8") -> Result[MagmaKey]:
    if isinstance(key, MagmaKey):
        return Ok(key)
    if isinstance(key, str):
        key = key.encode(encoding)
    try:
        return Ok(key_from_bytes(key))
    except InvalidKeyLength as e:
        logger.warning("Rejected key: %s", e)
        return Err(e)

def _check_length(data: bytes) -> Result[bytes]:
    if len(data) % BLOCK_SIZE != 0:
        logger.warning("Rejected input of %d bytes", len(data))
        return Err(InvalidLength(len(data)))
    return Ok(bytes(data))

def _process(data: bytes, key: KeyLike, forward: bool) -> Result[bytes]:
    checked = _check_length(data)
    if checked.is_err():
        return checked
    prepared = prepare_key(key)
    if prepared.is_err():
        return prepared
    blocks = bytes_to_blocks(checked.value)
    logger.debug("%s %d block(s)", "Encrypting" if forward else "Decrypting", blocks.shape[0])
    if forward:
        out = encrypt_blocks(blocks, prepared.value)
    else:
        out = decrypt_blocks(blocks, prepared.value)
    return Ok(blocks_to_bytes(out))

# -----------------------------
# Stream Wrapper
# -----------------------------
def encrypt(data: bytes, key: KeyLike) -> Result[bytes]:
    """
    Encrypt a block-aligned buffer, each 8-byte block independently.

    Returns Err(InvalidLength) when len(data) is not a multiple of 8 and
    Err(InvalidKeyLength) when the key is not 32 bytes. Output length always
    equals input length.
    """
    return _process(data, key, forward=True)

def decrypt(data: bytes, key: KeyLike) -> Result[bytes]:
    """Inverse of `encrypt` under the same key."""
    return _process(data, key, forward=False)

# -----------------------------
# Message helpers
# -----------------------------
def encrypt_message(message: str, key: Optional[KeyLike] = None, params: MagmaParams = MagmaParams()) -> Result[str]:
    prepared = prepare_key(params.key if key is None else key, params.encoding)
    if prepared.is_err():
        return prepared
    encrypted = encrypt(message.encode(params.encoding), prepared.value)
    if encrypted.is_err():
        return encrypted
    return Ok(bytes_to_text(encrypted.value))

def decrypt_message(text: str, key: Optional[KeyLike] = None, params: MagmaParams = MagmaParams()) -> Result[str]:
    prepared = prepare_key(params.key if key is None else key, params.encoding)
    if prepared.is_err():
        return prepared
    if not is_byte_text(text):
        return Err(ParseFailure(text))
    parsed = text_to_bytes(text)
    if parsed.is_err():
        return parsed
    decrypted = decrypt(parsed.value, prepared.value)
    if decrypted.is_err():
        return decrypted
    try:
        return Ok(decrypted.value.decode(params.encoding))
    except UnicodeDecodeError:
        return Err(InvalidUtf8(decrypted.value))
