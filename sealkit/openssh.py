"""The SSH ``chacha20-poly1305`` packet construct.

Only SSH implementations should use this. ``K_2`` (the first half of the key
material) encrypts the payload and derives the Poly1305 key; ``K_1`` (the second
half) encrypts the four-byte packet length.
"""

from __future__ import annotations

import hmac
from typing import Union

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

from sealkit.nonce import Nonce, UnspecifiedError
from sealkit.poly1305 import sign as _poly1305_sign

__all__ = [
    "CHACHA20_KEY_LEN",
    "KEY_LEN",
    "PACKET_LENGTH_LEN",
    "TAG_LEN",
    "SealingKey",
    "OpeningKey",
    "derive_poly1305_key",
]

CHACHA20_KEY_LEN = 32
BLOCK_LEN = 16

KEY_LEN = CHACHA20_KEY_LEN * 2
"""The length of the key material."""

PACKET_LENGTH_LEN = 4
"""The length in bytes of the ``packet_length`` field of an SSH packet."""

TAG_LEN = BLOCK_LEN
"""The length in bytes of an authentication tag."""

BytesLike = Union[bytes, bytearray, memoryview]
Buffer = Union[bytearray, memoryview]


def _chacha20(key: bytes, nonce: bytes, counter: int, data: bytes) -> bytes:
    """XOR ``data`` with the ChaCha20 keystream starting at block ``counter``."""
    full_nonce = counter.to_bytes(4, "little") + nonce
    encryptor = Cipher(algorithms.ChaCha20(key, full_nonce), mode=None).encryptor()
    return encryptor.update(data)


def _make_nonce(sequence_number: int) -> Nonce:
    return Nonce.from_big_endian_u32(sequence_number)


def _writable(buffer: Buffer) -> memoryview:
    view = memoryview(buffer)
    if view.readonly:
        raise TypeError("in_out must be a writable buffer")
    return view.cast("B") if view.format != "B" or view.ndim != 1 else view


def derive_poly1305_key(chacha_key: BytesLike, nonce: Nonce) -> bytes:
    """Derive the one-time Poly1305 key from the first ChaCha20 keystream block."""
    key = bytes(chacha_key)
    if len(key) != CHACHA20_KEY_LEN:
        raise UnspecifiedError(f"chacha20 key must be {CHACHA20_KEY_LEN} bytes")
    return _chacha20(key, bytes(nonce), 0, bytes(2 * BLOCK_LEN))


class _Key:
    __slots__ = ("k_1", "k_2")

    def __init__(self, key_material: BytesLike) -> None:
        material = bytes(key_material)
        if len(material) != KEY_LEN:
            raise UnspecifiedError(
                f"key material must be {KEY_LEN} bytes, got {len(material)}"
            )
        self.k_2 = material[:CHACHA20_KEY_LEN]
        self.k_1 = material[CHACHA20_KEY_LEN:]


class SealingKey:
    """A key for sealing packets."""

    __slots__ = ("_key",)

    def __init__(self, key_material: BytesLike) -> None:
        self._key = _Key(key_material)

    def seal_in_place(self, sequence_number: int, in_out: Buffer) -> bytes:
        """Encrypt ``packet_length || plaintext`` in place and return the tag."""
        view = _writable(in_out)
        if len(view) < PACKET_LENGTH_LEN:
            raise ValueError(f"packet must hold at least {PACKET_LENGTH_LEN} bytes")
        nonce = _make_nonce(sequence_number)
        nonce_bytes = bytes(nonce)
        poly_key = derive_poly1305_key(self._key.k_2, nonce)
        view[:PACKET_LENGTH_LEN] = _chacha20(
            self._key.k_1, nonce_bytes, 0, view[:PACKET_LENGTH_LEN].tobytes()
        )
        view[PACKET_LENGTH_LEN:] = _chacha20(
            self._key.k_2, nonce_bytes, 1, view[PACKET_LENGTH_LEN:].tobytes()
        )
        return bytes(_poly1305_sign(poly_key, view.tobytes()))


class OpeningKey:
    """A key for opening packets."""

    __slots__ = ("_key",)

    def __init__(self, key_material: BytesLike) -> None:
        self._key = _Key(key_material)

    def decrypt_packet_length(
        self, sequence_number: int, encrypted_packet_length: BytesLike
    ) -> bytes:
        """Return the decrypted, not yet authenticated, packet length bytes."""
        encrypted = bytes(encrypted_packet_length)
        if len(encrypted) != PACKET_LENGTH_LEN:
            raise ValueError(f"packet length must be {PACKET_LENGTH_LEN} bytes")
        nonce = bytes(_make_nonce(sequence_number))
        return _chacha20(self._key.k_1, nonce, 0, encrypted)

    def open_in_place(
        self, sequence_number: int, in_out: Buffer, tag: BytesLike
    ) -> bytes:
        """Verify and decrypt ``encrypted_packet_length || ciphertext``.

        The tag is checked before anything is decrypted, so ``in_out`` is left
        untouched when verification fails. On success the plaintext replaces
        ``in_out[PACKET_LENGTH_LEN:]`` and is returned.
        """
        view = _writable(in_out)
        if len(view) < PACKET_LENGTH_LEN:
            raise UnspecifiedError("packet shorter than the length field")
        tag_bytes = bytes(tag)
        if len(tag_bytes) != TAG_LEN:
            raise UnspecifiedError(f"tag must be {TAG_LEN} bytes")
        nonce = _make_nonce(sequence_number)
        poly_key = derive_poly1305_key(self._key.k_2, nonce)
        calculated = bytes(_poly1305_sign(poly_key, view.tobytes()))
        if not hmac.compare_digest(calculated, tag_bytes):
            raise UnspecifiedError("authentication failed")
        plaintext = _chacha20(
            self._key.k_2, bytes(nonce), 1, view[PACKET_LENGTH_LEN:].tobytes()
        )
        view[PACKET_LENGTH_LEN:] = plaintext
        return plaintext