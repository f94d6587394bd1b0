"""Encrypt or decrypt UTF-8 text with AES in CTR or CBC (PKCS#7) mode."""

from __future__ import annotations

import argparse
import binascii
import enum
import secrets
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

__all__ = [
    "AES_128_KEY_LEN",
    "AES_256_KEY_LEN",
    "AES_CTR_IV_LEN",
    "AES_CBC_IV_LEN",
    "Mode",
    "CipherError",
    "Encrypted",
    "construct_key_bytes",
    "aes_ctr_encrypt",
    "aes_ctr_decrypt",
    "aes_cbc_encrypt",
    "aes_cbc_decrypt",
    "main",
]

AES_128_KEY_LEN = 16
AES_256_KEY_LEN = 32
AES_CTR_IV_LEN = 16
AES_CBC_IV_LEN = 16
_AES_BLOCK_BITS = 128


class Mode(str, enum.Enum):
    """AES cipher mode."""

    CTR = "ctr"
    CBC = "cbc"


class CipherError(Exception):
    """An encryption or decryption step failed; the message says which."""


@dataclass(frozen=True)
class Encrypted:
    """The hex-encoded key, IV and ciphertext of one encryption."""

    key: str
    iv: str
    ciphertext: str

    def lines(self) -> list[str]:
        """The report lines printed by the command."""
        return [f"key: {self.key}", f"iv: {self.iv}", f"ciphertext: {self.ciphertext}"]


def _decode_hex(text: str, message: str) -> bytes:
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError):
        raise CipherError(message) from None


def construct_key_bytes(key: str | None) -> bytes:
    """Decode a hex key, or generate a random 128-bit key when none is given."""
    if key is None:
        return secrets.token_bytes(AES_128_KEY_LEN)
    return _decode_hex(key, "invalid key")


def _new_aes_key(key_bytes: bytes) -> algorithms.AES:
    if len(key_bytes) not in (AES_128_KEY_LEN, AES_256_KEY_LEN):
        raise CipherError("invalid aes key length")
    try:
        return algorithms.AES(key_bytes)
    except ValueError:
        raise CipherError("failed to construct aes key") from None


def _parse_iv(iv: str, length: int) -> bytes:
    iv_bytes = _decode_hex(iv, "invalid iv")
    if len(iv_bytes) != length:
        raise CipherError("invalid iv")
    return iv_bytes


def _utf8(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        raise CipherError("decrypted text was not a utf8 string") from None


def aes_ctr_encrypt(key: str | None, iv: str | None, plaintext: str) -> Encrypted:
    """Encrypt ``plaintext`` with AES-CTR; missing key or IV are generated."""
    key_bytes = construct_key_bytes(key)
    aes = _new_aes_key(key_bytes)
    iv_bytes = (
        _parse_iv(iv, AES_CTR_IV_LEN)
        if iv is not None
        else secrets.token_bytes(AES_CTR_IV_LEN)
    )
    encryptor = Cipher(aes, modes.CTR(iv_bytes)).encryptor()
    ciphertext = encryptor.update(plaintext.encode("utf-8")) + encryptor.finalize()
    return Encrypted(key_bytes.hex(), iv_bytes.hex(), ciphertext.hex())


def aes_ctr_decrypt(key: str, iv: str, ciphertext: str) -> str:
    """Decrypt hex ``ciphertext`` with AES-CTR and return the UTF-8 text."""
    key_bytes = construct_key_bytes(key)
    aes = _new_aes_key(key_bytes)
    iv_bytes = _parse_iv(iv, AES_CTR_IV_LEN)
    data = _decode_hex(ciphertext, "ciphertext is not valid hex encoding")
    decryptor = Cipher(aes, modes.CTR(iv_bytes)).decryptor()
    plaintext = decryptor.update(data) + decryptor.finalize()
    return _utf8(plaintext)


def aes_cbc_encrypt(key: str | None, iv: str | None, plaintext: str) -> Encrypted:
    """Encrypt ``plaintext`` with AES-CBC and PKCS#7 padding."""
    key_bytes = construct_key_bytes(key)
    aes = _new_aes_key(key_bytes)
    iv_bytes = (
        _parse_iv(iv, AES_CBC_IV_LEN)
        if iv is not None
        else secrets.token_bytes(AES_CBC_IV_LEN)
    )
    padder = padding.PKCS7(_AES_BLOCK_BITS).padder()
    padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
    encryptor = Cipher(aes, modes.CBC(iv_bytes)).encryptor()
    try:
        ciphertext = encryptor.update(padded) + encryptor.finalize()
    except ValueError:
        raise CipherError("failed to initalized aes encryption") from None
    return Encrypted(key_bytes.hex(), iv_bytes.hex(), ciphertext.hex())


def aes_cbc_decrypt(key: str, iv: str, ciphertext: str) -> str:
    """Decrypt hex ``ciphertext`` with AES-CBC, strip PKCS#7 padding, return text."""
    key_bytes = construct_key_bytes(key)
    aes = _new_aes_key(key_bytes)
    iv_bytes = _parse_iv(iv, AES_CBC_IV_LEN)
    data = _decode_hex(ciphertext, "ciphertext is not valid hex encoding")
    decryptor = Cipher(aes, modes.CBC(iv_bytes)).decryptor()
    unpadder = padding.PKCS7(_AES_BLOCK_BITS).unpadder()
    try:
        padded = decryptor.update(data) + decryptor.finalize()
        plaintext = unpadder.update(padded) + unpadder.finalize()
    except ValueError:
        raise CipherError("failed to decrypt ciphertext") from None
    return _utf8(plaintext)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cipher",
        description="Symmetric AES encryption and decryption of UTF-8 text.",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    mode_choices = [mode.value for mode in Mode]

    encrypt = commands.add_parser("encrypt", help="encrypt plaintext")
    encrypt.add_argument("-i", "--iv", help="Initalization Vector (IV) in hex")
    encrypt.add_argument(
        "-k",
        "--key",
        help="AES 128 or 256 bit key in hex, if not provided defaults to 128",
    )
    encrypt.add_argument(
        "-m", "--mode", required=True, choices=mode_choices, help="AES cipher mode"
    )
    encrypt.add_argument("plaintext")

    decrypt = commands.add_parser("decrypt", help="decrypt hex ciphertext")
    decrypt.add_argument(
        "-i", "--iv", required=True, help="Initalization Vector (IV) in hex"
    )
    decrypt.add_argument(
        "-k", "--key", required=True, help="AES 128 or 256 bit key in hex"
    )
    decrypt.add_argument(
        "-m", "--mode", required=True, choices=mode_choices, help="AES cipher mode"
    )
    decrypt.add_argument("ciphertext")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    args = _build_parser().parse_args(argv)
    mode = Mode(args.mode)
    try:
        if args.command == "encrypt":
            encrypt = aes_ctr_encrypt if mode is Mode.CTR else aes_cbc_encrypt
            result = encrypt(args.key, args.iv, args.plaintext)
            for line in result.lines():
                print(line)
        else:
            decrypt = aes_ctr_decrypt if mode is Mode.CTR else aes_cbc_decrypt
            print(decrypt(args.key, args.iv, args.ciphertext))
    except CipherError as exc:
        print(f'Error: "{exc}"', file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())