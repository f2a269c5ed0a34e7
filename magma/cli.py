import os
import sys
import logging
import argparse
from typing import Optional
from .params import DEFAULT_KEY, KEY_SIZE, bcolors
from .errors import InvalidUtf8, ParseFailure
from .public_api import prepare_key, encrypt, decrypt
from .serialization import bytes_to_text, text_to_bytes, is_byte_text
from .utils import generate_key

# (key, plaintext, expected ciphertext)
SELFTEST_VECTORS = [
    (DEFAULT_KEY.encode(), bytes(8), bytes([227, 216, 105, 250, 244, 187, 65, 94])),
    (DEFAULT_KEY.encode(), b"Hello, World!!!!", bytes([
        102, 188, 179, 48, 213, 52, 175, 222,
        150, 169, 14, 232, 121, 115, 66, 169,
    ])),
    (b"0123456789abcdef0123456789abcdef", bytes(range(1, 9)), bytes([123, 212, 164, 175, 243, 114, 212, 163])),
]

def resolve_key(key: Optional[str] = None, key_hex: Optional[str] = None):
    if key_hex:
        raw = bytes.fromhex(key_hex)
    else:
        raw = (key if key is not None else DEFAULT_KEY).encode("utf-8")
    return prepare_key(raw).unwrap()

def run_selftest() -> bool:
    ok = True
    for i, (key, plain, expected) in enumerate(SELFTEST_VECTORS, 1):
        got = encrypt(plain, key).unwrap()
        back = decrypt(got, key).unwrap()
        passed = got == expected and back == plain
        ok &= passed
        colour = bcolors.OKGREEN if passed else bcolors.FAIL
        print(f"{colour}Vector {i}: {'PASS' if passed else 'FAIL'}{bcolors.ENDC}")
        if not passed:
            print(f"  expected: {bytes_to_text(expected)}")
            print(f"  got:      {bytes_to_text(got)}")
    return ok

def encrypt_command(key, text: Optional[str] = None, in_path: Optional[str] = None) -> str:
    if in_path:
        with open(in_path, "rb") as f:
            data = f.read()
    else:
        data = (text or "").encode("utf-8")
    return bytes_to_text(encrypt(data, key).unwrap())

def decrypt_command(key, text: Optional[str] = None, in_path: Optional[str] = None, raw: bool = False) -> str:
    if in_path:
        with open(in_path, "r") as f:
            text = f.read().strip()
    text = text or ""
    if text and not is_byte_text(text):
        raise ParseFailure(text)
    data = decrypt(text_to_bytes(text).unwrap(), key).unwrap()
    if raw:
        return bytes_to_text(data)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        raise InvalidUtf8(data)

# -----------------------------
# CLI Main with Interactive Menu
# -----------------------------
def menu_key():
    key_input = input(f"Key ({KEY_SIZE} bytes, blank = default, hex: prefix for hex): ").strip()
    if key_input.startswith("hex:"):
        return resolve_key(key_hex=key_input[4:])
    return resolve_key(key=key_input or None)

def menu_encrypt():
    key = menu_key()
    inpath = input("Optional input file path (blank = prompt): ").strip() or None
    message = None
    if inpath is None:
        message = input("Message to encrypt: ")
    print(f"{bcolors.OKBLUE}Encrypted bytes:{bcolors.ENDC} {encrypt_command(key, message, inpath)}")

def menu_decrypt():
    key = menu_key()
    inpath = input("Optional input file path (blank = prompt): ").strip() or None
    text = None
    if inpath is None:
        text = input("Encrypted bytes (comma separated): ").strip()
    raw = (input("Show raw bytes instead of text? (y/n) [n]: ").strip().lower() or "n") == "y"
    print(f"{bcolors.OKBLUE}Message:{bcolors.ENDC} {decrypt_command(key, text, inpath, raw)}")

def menu_generate_key():
    print(f"{bcolors.WARNING}Random key (hex):{bcolors.ENDC} {generate_key().hex()}")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Magma CLI - GOST 28147-89 style 64-bit block cipher")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    encrypt_parser = subparsers.add_parser("encrypt", help="Encrypt a block-aligned message")
    encrypt_parser.add_argument("--text", help="Message text (UTF-8)")
    encrypt_parser.add_argument("--in_path", help="Input file path")
    encrypt_parser.add_argument("--key", help=f"Key text ({KEY_SIZE} UTF-8 bytes)")
    encrypt_parser.add_argument("--key-hex", dest="key_hex", help="Key as hex")

    decrypt_parser = subparsers.add_parser("decrypt", help="Decrypt comma separated bytes")
    decrypt_parser.add_argument("--text", help="Encrypted bytes, e.g. '1, 2, 255, ...'")
    decrypt_parser.add_argument("--in_path", help="File holding encrypted bytes text")
    decrypt_parser.add_argument("--key", help=f"Key text ({KEY_SIZE} UTF-8 bytes)")
    decrypt_parser.add_argument("--key-hex", dest="key_hex", help="Key as hex")
    decrypt_parser.add_argument("--raw", action="store_true", help="Print decrypted bytes instead of text")

    subparsers.add_parser("selftest", help="Check known vectors")
    subparsers.add_parser("genkey", help="Print a random key as hex")
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    if args.command:
        try:
            match args.command:
                case "encrypt":
                    key = resolve_key(args.key, args.key_hex)
                    print(encrypt_command(key, args.text, args.in_path))
                case "decrypt":
                    key = resolve_key(args.key, args.key_hex)
                    print(decrypt_command(key, args.text, args.in_path, args.raw))
                case "selftest":
                    if not run_selftest():
                        sys.exit(1)
                case "genkey":
                    print(generate_key().hex())
        except (ValueError, OSError) as e:
            print(f"{bcolors.FAIL}ERROR:{bcolors.ENDC}", e)
            sys.exit(1)
        return

    _=os.system("cls") | os.system("clear")
    while True:
        print(f"{bcolors.OKCYAN}Magma CLI - 64-bit block cipher, 256-bit key, 32 Feistel rounds{bcolors.ENDC}")
        print(f"{bcolors.OKCYAN}Blocks are encrypted independently; input must be a multiple of 8 bytes.{bcolors.ENDC}")
        print("")
        print(f"{bcolors.BOLD}1){bcolors.ENDC} Encrypt message")
        print(f"{bcolors.BOLD}2){bcolors.ENDC} Decrypt bytes")
        print(f"{bcolors.BOLD}3){bcolors.ENDC} Generate random key")
        print(f"{bcolors.GREY}4) Run self-test{bcolors.ENDC}")
        print(f"{bcolors.BOLD}0){bcolors.ENDC} Exit")
        choice = input(f"{bcolors.BOLD}Choice: {bcolors.ENDC}").strip()

        try:
            match choice:
                case "0":
                    break
                case "1":
                    menu_encrypt()
                case "2":
                    menu_decrypt()
                case "3":
                    menu_generate_key()
                case "4":
                    run_selftest()
                case _:
                    print("Invalid choice")
        except (ValueError, OSError) as e:
            print(f"{bcolors.FAIL}ERROR:{bcolors.ENDC}", e)
        _=input(f"{bcolors.OKGREEN}Any Key to Continue{bcolors.ENDC}")
        _=os.system("cls") | os.system("clear")

if __name__ == "__main__":
    main()
