"""One-time Poly1305 authenticator without IETF AEAD padding."""

from __future__ import annotations

from typing import Union

from cryptography.hazmat.primitives.poly1305 import Poly1305

from sealkit.aead_key import Tag
from sealkit.nonce import UnspecifiedError

__all__ = ["KEY_LEN", "Context", "sign"]

KEY_LEN = 32
"""A Poly1305 key is 32 bytes: the clamped ``r`` followed by the ``s`` nonce."""

BytesLike = Union[bytes, bytearray, memoryview]


class Context:
    """An incremental Poly1305 computation under a single one-time key."""

    __slots__ = ("_mac",)

    def __init__(self, key: BytesLike) -> None:
        key_bytes = bytes(key)
        if len(key_bytes) != KEY_LEN:
            raise UnspecifiedError(
                f"poly1305 key must be {KEY_LEN} bytes, got {len(key_bytes)}"
            )
        self._mac = Poly1305(key_bytes)

    def update(self, data: BytesLike) -> None:
        """Feed more message bytes into the authenticator."""
        self._mac.update(bytes(data))

    def finish(self) -> Tag:
        """Return the tag; the context cannot be used afterwards."""
        return Tag(self._mac.finalize())


def sign(key: BytesLike, data: BytesLike) -> Tag:
    """Compute the Poly1305 tag of ``data`` under ``key`` in one call."""
    ctx = Context(key)
    ctx.update(data)
    return ctx.finish()