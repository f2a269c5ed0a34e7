# magma/__init__.py
from .params import (
    BLOCK_SIZE, KEY_SIZE, ROUNDS, ROTATION, DTYPE,
    TEXT_SEPARATOR, DEFAULT_KEY, MagmaParams,
)
from .errors import (
    MagmaError, InvalidLength, InvalidKeyLength, ParseFailure, InvalidUtf8,
    Ok, Err, Result,
)
from .sbox import S_BOX, substitute
from .feistel import round_function, feistel_round
from .key_schedule import ENCRYPT_ORDER, DECRYPT_ORDER, MagmaKey, key_from_bytes
from .permutation import encrypt_block, decrypt_block, encrypt_blocks, decrypt_blocks
from .serialization import bytes_to_text, text_to_bytes, is_byte_text, bytes_to_blocks, blocks_to_bytes
from .utils import generate_key
from .public_api import (
    prepare_key,
    encrypt, decrypt,
    encrypt_message, decrypt_message,
)
