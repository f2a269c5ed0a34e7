# api_tests.py
import io
import os
import shutil
import tempfile
import traceback
from contextlib import redirect_stdout
from typing import Callable, List

import numpy as np

from magma import (
    DEFAULT_KEY, MagmaParams,
    encrypt, decrypt, encrypt_message, decrypt_message,
    bytes_to_text, text_to_bytes, is_byte_text,
    prepare_key, generate_key,
    Ok, Err, InvalidLength, InvalidKeyLength, ParseFailure, InvalidUtf8, MagmaError,
)
from magma.params import bcolors
from magma.cli import main as cli_main, run_selftest

HELLO = b"Hello, World!!!!"
HELLO_CIPHER = bytes([
    102, 188, 179, 48, 213, 52, 175, 222,
    150, 169, 14, 232, 121, 115, 66, 169,
])

# ---------- helpers ----------
def capture_stdout(func: Callable, *args, **kwargs) -> str:
    buf = io.StringIO()
    with redirect_stdout(buf):
        func(*args, **kwargs)
    return buf.getvalue()

def run_cli(*argv) -> str:
    return capture_stdout(cli_main, list(argv))

# ---------- stream wrapper ----------
def test_empty_plaintext_encrypts_to_empty():
    result = encrypt(b"", DEFAULT_KEY)
    assert isinstance(result, Ok)
    assert result.value == b""

def test_known_message_vector():
    assert encrypt(HELLO, DEFAULT_KEY).unwrap() == HELLO_CIPHER
    assert decrypt(HELLO_CIPHER, DEFAULT_KEY).unwrap() == HELLO

def test_round_trip_and_length_preservation():
    rng = np.random.default_rng(89)
    for n_blocks in (0, 1, 2, 7, 64):
        key = generate_key()
        plain = rng.integers(0, 256, size=8 * n_blocks, dtype=np.uint8).tobytes()
        cipher = encrypt(plain, key).unwrap()
        assert len(cipher) == len(plain)
        back = decrypt(cipher, key).unwrap()
        assert len(back) == len(cipher)
        assert back == plain

def test_equal_blocks_give_equal_output():
    cipher = encrypt(b"ABCDEFGH" * 3, DEFAULT_KEY).unwrap()
    assert cipher[:8] == cipher[8:16] == cipher[16:]
    assert encrypt(b"ABCDEFGH" * 3, DEFAULT_KEY).unwrap() == cipher

def test_misaligned_length_rejected():
    for n in (1, 7, 9, 15):
        result = encrypt(bytes(n), DEFAULT_KEY)
        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidLength)
        assert result.error.actual == n
        assert str(n) in str(result.error)
        assert isinstance(decrypt(bytes(n), DEFAULT_KEY).error, InvalidLength)

def test_bad_key_rejected():
    for key in (b"", b"short", "SECRET_KEY_WITH_LENGTH_32_BYTES", "ключ" * 8):
        result = encrypt(bytes(8), key)
        assert result.is_err()
        assert isinstance(result.error, InvalidKeyLength)
        assert isinstance(result.error, InvalidLength)

def test_prepared_key_is_reused():
    prepared = prepare_key(DEFAULT_KEY).unwrap()
    assert prepare_key(prepared).unwrap() is prepared
    assert encrypt(HELLO, prepared).unwrap() == HELLO_CIPHER

def test_unwrap_raises_carried_error():
    result = encrypt(bytes(3), DEFAULT_KEY)
    try:
        result.unwrap()
    except InvalidLength as e:
        assert e is result.error
        assert isinstance(e, MagmaError) and isinstance(e, ValueError)
    else:
        raise AssertionError("unwrap did not raise")
    assert result.unwrap_or(b"fallback") == b"fallback"

# ---------- text codec ----------
def test_bytes_to_text():
    assert bytes_to_text(bytes([1, 2, 255])) == "1, 2, 255"
    assert bytes_to_text(b"") == ""
    assert bytes_to_text(bytes([0])) == "0"

def test_text_codec_round_trip():
    samples = [b"", bytes([0]), bytes(range(256)), HELLO_CIPHER, generate_key()]
    for data in samples:
        assert text_to_bytes(bytes_to_text(data)).unwrap() == data

def test_text_to_bytes_reports_bad_token():
    cases = {
        "1, 2, 256": "256",
        "1, x, 3": "x",
        "1,2": "1,2",
        "1, , 3": "",
        "-1": "-1",
        "1, 2, ": "",
    }
    for text, token in cases.items():
        result = text_to_bytes(text)
        assert isinstance(result, Err), text
        assert isinstance(result.error, ParseFailure)
        assert result.error.token == token

def test_is_byte_text():
    assert is_byte_text("1, 2, 255")
    assert is_byte_text("1,2 3")
    assert not is_byte_text("")
    assert not is_byte_text("1, a")

# ---------- message helpers ----------
def test_message_round_trip():
    text = encrypt_message("Hello, World!!!!").unwrap()
    assert text == bytes_to_text(HELLO_CIPHER)
    assert decrypt_message(text).unwrap() == "Hello, World!!!!"

def test_message_utf8_round_trip_with_params():
    params = MagmaParams(key="0123456789abcdef0123456789abcdef")
    message = "Привет!!"  # 14 bytes in UTF-8
    assert encrypt_message(message, params=params).error.actual == 14
    message = "Привет, мир!"  # 21 bytes
    assert isinstance(encrypt_message(message, params=params).error, InvalidLength)
    message = "Привет, мир!!!!"  # 24 bytes
    text = encrypt_message(message, params=params).unwrap()
    assert decrypt_message(text, params=params).unwrap() == message

def test_message_errors():
    assert isinstance(encrypt_message("Hello", key="short").error, InvalidKeyLength)
    assert isinstance(decrypt_message("hello").error, ParseFailure)
    assert isinstance(decrypt_message("1, 2, 3").error, InvalidLength)
    assert isinstance(decrypt_message("1, 2, 300").error, ParseFailure)
    # plaintext that is not UTF-8
    cipher = encrypt(b"\xff" * 8, DEFAULT_KEY).unwrap()
    result = decrypt_message(bytes_to_text(cipher))
    assert isinstance(result.error, InvalidUtf8)
    assert result.error.data == b"\xff" * 8

# ---------- cli ----------
def test_cli_selftest():
    out = capture_stdout(run_selftest)
    assert "FAIL" not in out
    assert out.count("PASS") == 3

def test_cli_encrypt_decrypt():
    out = run_cli("encrypt", "--text", "Hello, World!!!!")
    assert out.strip() == bytes_to_text(HELLO_CIPHER)
    out = run_cli("decrypt", "--text", bytes_to_text(HELLO_CIPHER))
    assert out.strip() == "Hello, World!!!!"
    out = run_cli("decrypt", "--text", bytes_to_text(HELLO_CIPHER), "--raw")
    assert out.strip() == bytes_to_text(HELLO)

def test_cli_files_and_hex_key():
    tmpdir = tempfile.mkdtemp(prefix="magma_test_")
    try:
        key = generate_key()
        plain_path = os.path.join(tmpdir, "plain.bin")
        enc_path = os.path.join(tmpdir, "enc.txt")
        with open(plain_path, "wb") as f:
            f.write(b"file-io!" * 4)
        out = run_cli("encrypt", "--in_path", plain_path, "--key-hex", key.hex())
        with open(enc_path, "w") as f:
            f.write(out)
        assert run_cli("decrypt", "--in_path", enc_path, "--key-hex", key.hex()).strip() == "file-io!" * 4
    finally:
        shutil.rmtree(tmpdir)

def test_cli_reports_errors():
    for argv in (["encrypt", "--text", "odd"], ["encrypt", "--text", "12345678", "--key", "short"]):
        try:
            out = run_cli(*argv)
        except SystemExit as e:
            assert e.code == 1
        else:
            raise AssertionError(f"no exit for {argv}: {out}")

# ---------- main test suite ----------
def main():
    tests = [(name, fn) for name, fn in globals().items() if name.startswith("test_") and callable(fn)]
    results: List[bool] = []
    print("=" * 80)
    print("MAGMA TEST SUITE")
    print("=" * 80)
    for name, fn in tests:
        try:
            fn()
            print(f"{bcolors.OKGREEN}PASS{bcolors.ENDC} {name}")
            results.append(True)
        except Exception:
            print(f"{bcolors.FAIL}FAIL{bcolors.ENDC} {name}")
            print(traceback.format_exc(limit=3))
            results.append(False)
    print(f"{sum(results)}/{len(results)} passed")

if __name__ == "__main__":
    main()
