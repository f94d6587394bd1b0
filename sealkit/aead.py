"""AEAD keys bound to a role: sealing, opening, and keys that take explicit nonces."""

from __future__ import annotations

import warnings
from typing import Union

from sealkit.aead_key import TAG_LEN, Aad, Algorithm, Tag, UnboundKey
from sealkit.nonce import Nonce, UnspecifiedError
from sealkit.nonce_sequence import NonceSequence

__all__ = ["SealingKey", "OpeningKey", "LessSafeKey"]

AadLike = Union[Aad, bytes, bytearray, memoryview, str]
Buffer = Union[bytearray, memoryview]


def _range_start(ciphertext_and_tag: int | slice) -> int:
    """Return the start of an open-ended range given as an int or ``slice(start, None)``."""
    if isinstance(ciphertext_and_tag, slice):
        if ciphertext_and_tag.stop is not None or ciphertext_and_tag.step not in (None, 1):
            raise ValueError("ciphertext_and_tag must be an open-ended range")
        start = ciphertext_and_tag.start or 0
    else:
        start = ciphertext_and_tag
    if not isinstance(start, int) or start < 0:
        raise ValueError("ciphertext_and_tag must start at a non-negative index")
    return start


def _open_within(
    key: UnboundKey,
    nonce: Nonce,
    aad: AadLike,
    in_out: Buffer,
    ciphertext_and_tag: int | slice,
) -> bytes:
    prefix_len = _range_start(ciphertext_and_tag)
    if len(in_out) < prefix_len:
        raise UnspecifiedError("ciphertext range starts past the end of the buffer")
    ciphertext_len = len(in_out) - prefix_len - TAG_LEN
    if ciphertext_len < 0:
        raise UnspecifiedError("input shorter than the tag")
    if ciphertext_len > key.algorithm.max_input_len:
        raise UnspecifiedError("input too long for a single nonce")
    with memoryview(in_out) as view:
        plaintext = key.open_combined(nonce, aad, view[prefix_len:])
        # Shift the plaintext to the start of the buffer.
        view[:ciphertext_len] = plaintext
    return plaintext


class _BoundKey:
    __slots__ = ("_key", "_nonce_sequence")

    def __init__(self, key: UnboundKey, nonce_sequence: NonceSequence) -> None:
        self._key = key
        self._nonce_sequence = nonce_sequence

    @property
    def algorithm(self) -> Algorithm:
        """The key's AEAD algorithm."""
        return self._key.algorithm

    def __repr__(self) -> str:
        return f"{type(self).__name__}(algorithm={self.algorithm!r})"


class SealingKey(_BoundKey):
    """An AEAD key for encrypting and signing, bound to a nonce sequence."""

    __slots__ = ()

    def __init__(self, key: UnboundKey, nonce_sequence: NonceSequence) -> None:
        super().__init__(key, nonce_sequence)

    def seal_in_place(self, aad: AadLike, in_out: bytearray) -> None:
        """Deprecated alias of ``seal_in_place_append_tag``."""
        warnings.warn(
            "seal_in_place is renamed to seal_in_place_append_tag",
            DeprecationWarning,
            stacklevel=2,
        )
        self.seal_in_place_append_tag(aad, in_out)

    def seal_in_place_append_tag(self, aad: AadLike, in_out: bytearray) -> None:
        """Encrypt ``in_out`` in place and append the tag to it."""
        nonce = self._nonce_sequence.advance()
        self._key.seal_combined(nonce, aad, in_out)

    def seal_in_place_separate_tag(self, aad: AadLike, in_out: Buffer) -> Tag:
        """Encrypt ``in_out`` in place and return the tag."""
        nonce = self._nonce_sequence.advance()
        return self._key.seal_separate(nonce, aad, in_out)


class OpeningKey(_BoundKey):
    """An AEAD key for authenticating and decrypting, bound to a nonce sequence."""

    __slots__ = ()

    def __init__(self, key: UnboundKey, nonce_sequence: NonceSequence) -> None:
        super().__init__(key, nonce_sequence)

    def open_in_place(self, aad: AadLike, in_out: Buffer) -> bytes:
        """Open ``ciphertext || tag`` in ``in_out``; the plaintext replaces its start."""
        return self.open_within(aad, in_out, 0)

    def open_within(
        self, aad: AadLike, in_out: Buffer, ciphertext_and_tag: int | slice
    ) -> bytes:
        """Open ``in_out[start:]`` and move the plaintext to the start of ``in_out``.

        ``ciphertext_and_tag`` is the start index, or ``slice(start, None)``.
        """
        nonce = self._nonce_sequence.advance()
        return _open_within(self._key, nonce, aad, in_out, ciphertext_and_tag)


class LessSafeKey:
    """An immutable AEAD key that takes an explicit nonce for every operation."""

    __slots__ = ("_key",)

    def __init__(self, key: UnboundKey) -> None:
        self._key = key

    @property
    def algorithm(self) -> Algorithm:
        """The key's AEAD algorithm."""
        return self._key.algorithm

    def open_in_place(self, nonce: Nonce, aad: AadLike, in_out: Buffer) -> bytes:
        """Like ``OpeningKey.open_in_place`` with an explicit nonce."""
        return self.open_within(nonce, aad, in_out, 0)

    def open_within(
        self,
        nonce: Nonce,
        aad: AadLike,
        in_out: Buffer,
        ciphertext_and_tag: int | slice,
    ) -> bytes:
        """Like ``OpeningKey.open_within`` with an explicit nonce."""
        return _open_within(self._key, nonce, aad, in_out, ciphertext_and_tag)

    def seal_in_place(self, nonce: Nonce, aad: AadLike, in_out: bytearray) -> None:
        """Deprecated alias of ``seal_in_place_append_tag``."""
        warnings.warn(
            "seal_in_place is renamed to seal_in_place_append_tag",
            DeprecationWarning,
            stacklevel=2,
        )
        self.seal_in_place_append_tag(nonce, aad, in_out)

    def seal_in_place_append_tag(
        self, nonce: Nonce, aad: AadLike, in_out: bytearray
    ) -> None:
        """Like ``SealingKey.seal_in_place_append_tag`` with an explicit nonce."""
        self._key.seal_combined(nonce, aad, in_out)

    def seal_in_place_separate_tag(
        self, nonce: Nonce, aad: AadLike, in_out: Buffer
    ) -> Tag:
        """Like ``SealingKey.seal_in_place_separate_tag`` with an explicit nonce."""
        return self._key.seal_separate(nonce, aad, in_out)

    def __repr__(self) -> str:
        return f"LessSafeKey(algorithm={self.algorithm!r})"