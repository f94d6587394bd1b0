"""Nonces for single AEAD sealing or opening operations."""

from __future__ import annotations

import struct
from collections.abc import Sequence

__all__ = ["NONCE_LEN", "IV_LEN", "UnspecifiedError", "Nonce"]

NONCE_LEN = 96 // 8
"""All supported AEADs use 96-bit nonces."""

IV_LEN = 16
"""Length of a block-sized initialisation vector."""

_U32_MAX = 0xFFFF_FFFF


class UnspecifiedError(ValueError):
    """A cryptographic operation failed for a reason that is deliberately not given."""


class Nonce:
    """A nonce for a single AEAD opening or sealing operation.

    The caller must make sure that each nonce is used at most once per key.
    """

    __slots__ = ("_value",)

    def __init__(self, value: bytes | bytearray | memoryview) -> None:
        data = bytes(value)
        if len(data) != NONCE_LEN:
            raise UnspecifiedError(
                f"nonce must be {NONCE_LEN} bytes, got {len(data)}"
            )
        self._value = data

    @classmethod
    def try_assume_unique_for_key(cls, value: bytes | bytearray | memoryview) -> Nonce:
        """Build a nonce from ``value``; raise ``UnspecifiedError`` if it is not 12 bytes."""
        return cls(value)

    @classmethod
    def assume_unique_for_key(cls, value: bytes | bytearray | memoryview) -> Nonce:
        """Build a nonce from exactly ``NONCE_LEN`` bytes assumed unique for the key."""
        return cls(value)

    @classmethod
    def from_iv(cls, iv: bytes | bytearray | memoryview) -> Nonce:
        """Build a nonce from the first 12 bytes of a 16-byte IV."""
        data = bytes(iv)
        if len(data) != IV_LEN:
            raise UnspecifiedError(f"iv must be {IV_LEN} bytes, got {len(data)}")
        return cls(data[:NONCE_LEN])

    @classmethod
    def from_u32_words(cls, words: Sequence[int]) -> Nonce:
        """Build a nonce from three 32-bit words, each laid out little-endian."""
        if len(words) != NONCE_LEN // 4:
            raise UnspecifiedError(
                f"expected {NONCE_LEN // 4} words, got {len(words)}"
            )
        if any(not 0 <= word <= _U32_MAX for word in words):
            raise UnspecifiedError("words must be unsigned 32-bit integers")
        return cls(struct.pack("<3I", *words))

    @classmethod
    def from_big_endian_u32(cls, number: int) -> Nonce:
        """Build a nonce of eight zero bytes followed by ``number`` as big-endian u32."""
        if not 0 <= number <= _U32_MAX:
            raise UnspecifiedError("number must be an unsigned 32-bit integer")
        return cls(bytes(8) + number.to_bytes(4, "big"))

    def __bytes__(self) -> bytes:
        return self._value

    def __len__(self) -> int:
        return NONCE_LEN

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Nonce):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"Nonce({self._value.hex()})"