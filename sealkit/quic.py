"""QUIC header protection masks."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Union

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from sealkit.aead_key import TAG_LEN
from sealkit.nonce import UnspecifiedError

__all__ = [
    "SAMPLE_LEN",
    "MASK_LEN",
    "Algorithm",
    "AES_128",
    "AES_256",
    "CHACHA20",
    "HeaderProtectionKey",
]

SAMPLE_LEN = TAG_LEN
"""The length of a ciphertext sample."""

MASK_LEN = 5

BytesLike = Union[bytes, bytearray, memoryview]
_MaskFn = Callable[[bytes], bytes]


def _aes_mask_fn(key: bytes) -> _MaskFn:
    cipher = Cipher(algorithms.AES(key), modes.ECB())

    def mask(sample: bytes) -> bytes:
        return cipher.encryptor().update(sample)[:MASK_LEN]

    return mask


def _chacha20_mask_fn(key: bytes) -> _MaskFn:
    def mask(sample: bytes) -> bytes:
        # The sample is a little-endian block counter followed by a 12-byte nonce,
        # which is exactly the layout the ChaCha20 primitive takes.
        cipher = Cipher(algorithms.ChaCha20(key, sample), mode=None)
        return cipher.encryptor().update(bytes(MASK_LEN))

    return mask


@dataclass(frozen=True, eq=False)
class Algorithm:
    """A QUIC header protection algorithm; equal when the ids are equal."""

    id: str
    key_len: int
    _init: Callable[[bytes], _MaskFn] = field(repr=False)

    @property
    def sample_len(self) -> int:
        """The required sample length."""
        return SAMPLE_LEN

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Algorithm):
            return self.id == other.id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return self.id


AES_128 = Algorithm("AES_128", 16, _aes_mask_fn)
AES_256 = Algorithm("AES_256", 32, _aes_mask_fn)
CHACHA20 = Algorithm("CHACHA20", 32, _chacha20_mask_fn)


class HeaderProtectionKey:
    """A key for generating QUIC header protection masks."""

    __slots__ = ("_algorithm", "_mask")

    def __init__(self, algorithm: Algorithm, key_bytes: BytesLike) -> None:
        key = bytes(key_bytes)
        if len(key) != algorithm.key_len:
            raise UnspecifiedError(
                f"{algorithm.id} needs a {algorithm.key_len}-byte key, got {len(key)}"
            )
        self._algorithm = algorithm
        self._mask = algorithm._init(key)

    @property
    def algorithm(self) -> Algorithm:
        """The key's algorithm."""
        return self._algorithm

    def new_mask(self, sample: BytesLike) -> bytes:
        """Return the five-byte mask for a ``SAMPLE_LEN``-byte sample."""
        data = bytes(sample)
        if len(data) != SAMPLE_LEN:
            raise UnspecifiedError(
                f"sample must be {SAMPLE_LEN} bytes, got {len(data)}"
            )
        return self._mask(data)

    def __repr__(self) -> str:
        return f"HeaderProtectionKey(algorithm={self._algorithm!r})"