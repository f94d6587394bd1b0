"""AEAD algorithms, associated data, tags and keys not yet bound to a role."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, ChaCha20Poly1305

from sealkit.nonce import NONCE_LEN, Nonce, UnspecifiedError

__all__ = [
    "TAG_LEN",
    "MAX_TAG_LEN",
    "MAX_KEY_LEN",
    "AES_128_KEY_LEN",
    "AES_256_KEY_LEN",
    "CHACHA20_KEY_LEN",
    "Algorithm",
    "AES_128_GCM",
    "AES_256_GCM",
    "CHACHA20_POLY1305",
    "Aad",
    "Tag",
    "UnboundKey",
]

TAG_LEN = 16
"""All supported AEADs use 128-bit tags."""

MAX_TAG_LEN = TAG_LEN
"""The maximum length of a tag for the algorithms in this module."""

MAX_KEY_LEN = 32

AES_128_KEY_LEN = 16
AES_256_KEY_LEN = 32
CHACHA20_KEY_LEN = 32

_U64_MAX = (1 << 64) - 1

BytesLike = Union[bytes, bytearray, memoryview]


class _AeadCipher(Protocol):
    def encrypt(self, nonce: bytes, data: bytes, associated_data: bytes | None) -> bytes: ...

    def decrypt(self, nonce: bytes, data: bytes, associated_data: bytes | None) -> bytes: ...


@dataclass(frozen=True, eq=False)
class Algorithm:
    """An AEAD algorithm; two algorithms are equal when their ids are."""

    id: str
    key_len: int
    max_input_len: int
    _factory: Callable[[bytes], _AeadCipher] = field(repr=False)

    @property
    def tag_len(self) -> int:
        """The length of a tag."""
        return TAG_LEN

    @property
    def nonce_len(self) -> int:
        """The length of the nonces."""
        return NONCE_LEN

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Algorithm):
            return self.id == other.id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return self.id


AES_128_GCM = Algorithm("AES_128_GCM", AES_128_KEY_LEN, _U64_MAX, AESGCM)
"""AES-128 in GCM mode with 128-bit tags and 96-bit nonces."""

AES_256_GCM = Algorithm("AES_256_GCM", AES_256_KEY_LEN, _U64_MAX, AESGCM)
"""AES-256 in GCM mode with 128-bit tags and 96-bit nonces."""

CHACHA20_POLY1305 = Algorithm(
    "CHACHA20_POLY1305", CHACHA20_KEY_LEN, _U64_MAX, ChaCha20Poly1305
)
"""ChaCha20-Poly1305 with 256-bit keys and 96-bit nonces."""


class Aad:
    """Additional authenticated data: authenticated but not encrypted."""

    __slots__ = ("_data",)

    def __init__(self, data: BytesLike | str = b"") -> None:
        self._data = data.encode("utf-8") if isinstance(data, str) else bytes(data)

    @classmethod
    def empty(cls) -> Aad:
        """An empty ``Aad``."""
        return cls(b"")

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Aad):
            return self._data == other._data
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"Aad({self._data.hex()})"


class Tag:
    """An authentication tag of ``TAG_LEN`` bytes."""

    __slots__ = ("_value",)

    def __init__(self, value: BytesLike) -> None:
        data = bytes(value)
        if len(data) != TAG_LEN:
            raise UnspecifiedError(f"tag must be {TAG_LEN} bytes, got {len(data)}")
        self._value = data

    def __bytes__(self) -> bytes:
        return self._value

    def __len__(self) -> int:
        return TAG_LEN

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Tag):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"Tag({self._value.hex()})"


def _writable(buffer: bytearray | memoryview) -> memoryview:
    view = memoryview(buffer)
    if view.readonly:
        raise TypeError("in_out must be a writable buffer")
    return view.cast("B") if view.format != "B" or view.ndim != 1 else view


def _nonce_bytes(nonce: Nonce) -> bytes:
    data = bytes(nonce)
    if len(data) != NONCE_LEN:
        raise UnspecifiedError(f"nonce must be {NONCE_LEN} bytes, got {len(data)}")
    return data


def _aad_bytes(aad: Aad | BytesLike | str) -> bytes:
    return bytes(aad if isinstance(aad, Aad) else Aad(aad))


class UnboundKey:
    """An AEAD key without a designated role or nonce sequence."""

    __slots__ = ("_algorithm", "_cipher")

    def __init__(self, algorithm: Algorithm, key_bytes: BytesLike) -> None:
        key = bytes(key_bytes)
        if len(key) != algorithm.key_len:
            raise UnspecifiedError(
                f"{algorithm.id} needs a {algorithm.key_len}-byte key, got {len(key)}"
            )
        try:
            self._cipher = algorithm._factory(key)
        except ValueError as exc:
            raise UnspecifiedError("key initialisation failed") from exc
        self._algorithm = algorithm

    @property
    def algorithm(self) -> Algorithm:
        """The key's AEAD algorithm."""
        return self._algorithm

    def _check_input_len(self, length: int) -> None:
        if length > self._algorithm.max_input_len:
            raise UnspecifiedError("input too long for a single nonce")

    def _encrypt(self, nonce: Nonce, aad: Aad | BytesLike | str, plaintext: bytes) -> bytes:
        return self._cipher.encrypt(_nonce_bytes(nonce), plaintext, _aad_bytes(aad))

    def seal_separate(
        self, nonce: Nonce, aad: Aad | BytesLike | str, in_out: bytearray | memoryview
    ) -> Tag:
        """Encrypt ``in_out`` in place and return the tag separately."""
        view = _writable(in_out)
        length = len(view)
        self._check_input_len(length)
        sealed = self._encrypt(nonce, aad, view.tobytes())
        view[:] = sealed[:length]
        return Tag(sealed[length:])

    def seal_combined(
        self, nonce: Nonce, aad: Aad | BytesLike | str, in_out: bytearray
    ) -> None:
        """Encrypt ``in_out`` in place and append the tag to it."""
        if not isinstance(in_out, bytearray):
            raise TypeError("in_out must be a bytearray so the tag can be appended")
        length = len(in_out)
        self._check_input_len(length)
        sealed = self._encrypt(nonce, aad, bytes(in_out))
        in_out[:length] = sealed[:length]
        in_out.extend(sealed[length:])

    def open_combined(
        self, nonce: Nonce, aad: Aad | BytesLike | str, in_out: bytearray | memoryview
    ) -> bytes:
        """Authenticate and decrypt ``ciphertext || tag`` held in ``in_out``.

        The plaintext overwrites the start of ``in_out`` and is also returned.
        """
        view = _writable(in_out)
        if len(view) < TAG_LEN:
            raise UnspecifiedError("input shorter than the tag")
        plaintext_len = len(view) - TAG_LEN
        self._check_input_len(plaintext_len)
        try:
            plaintext = self._cipher.decrypt(
                _nonce_bytes(nonce), view.tobytes(), _aad_bytes(aad)
            )
        except InvalidTag as exc:
            raise UnspecifiedError("authentication failed") from exc
        view[:plaintext_len] = plaintext
        return plaintext

    def __repr__(self) -> str:
        return f"UnboundKey(algorithm={self._algorithm!r})"