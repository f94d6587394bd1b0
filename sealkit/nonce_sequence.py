"""Nonce sequences built from a fixed identifier and an incrementing counter."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sealkit.nonce import NONCE_LEN, Nonce, UnspecifiedError

__all__ = [
    "NonceSequence",
    "Counter32",
    "Counter32Builder",
    "Counter64",
    "Counter64Builder",
]


class NonceSequence(ABC):
    """A sequence of unique nonces.

    ``advance`` must never return the same nonce twice. Once it fails, it must
    keep failing.
    """

    @abstractmethod
    def advance(self) -> Nonce:
        """Return the next nonce, or raise ``UnspecifiedError`` when exhausted."""


class _Counter(NonceSequence):
    _COUNTER_BYTES: int
    _ID_BYTES: int

    def __init__(self, limit: int, identifier: bytes, counter: int) -> None:
        self._limit = limit
        self._generated = 0
        self._identifier = identifier
        self._counter = counter

    @property
    def identifier(self) -> bytes:
        """The fixed identifier placed at the start of every nonce."""
        return self._identifier

    @property
    def counter(self) -> int:
        """The counter value the next nonce will carry."""
        return self._counter

    @property
    def generated(self) -> int:
        """How many nonces have been requested so far."""
        return self._generated

    @property
    def limit(self) -> int:
        """The maximum number of nonces this sequence will produce."""
        return self._limit

    def advance(self) -> Nonce:
        max_value = (1 << (8 * self._COUNTER_BYTES)) - 1
        if self._generated == max_value:
            raise UnspecifiedError("nonce sequence exhausted")
        self._generated += 1
        if self._generated > self._limit:
            raise UnspecifiedError("nonce sequence limit reached")
        nonce = Nonce(
            self._identifier + self._counter.to_bytes(self._COUNTER_BYTES, "big")
        )
        self._counter = (self._counter + 1) & max_value
        return nonce

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(identifier={self._identifier.hex()}, "
            f"counter={self._counter}, generated={self._generated}, "
            f"limit={self._limit})"
        )


class _CounterBuilder:
    _COUNTER_BYTES: int
    _ID_BYTES: int
    _PRODUCT: type[_Counter]

    def __init__(self) -> None:
        self._max = (1 << (8 * self._COUNTER_BYTES)) - 1
        self._limit = self._max
        self._identifier = bytes(self._ID_BYTES)
        self._counter = 0

    def _check_range(self, name: str, value: int) -> int:
        if not 0 <= value <= self._max:
            raise ValueError(
                f"{name} must be an unsigned {8 * self._COUNTER_BYTES}-bit integer"
            )
        return value

    def identifier(self, identifier: bytes | bytearray | memoryview):
        """Set the identifier that differentiates this nonce sequence."""
        data = bytes(identifier)
        if len(data) != self._ID_BYTES:
            raise ValueError(
                f"identifier must be {self._ID_BYTES} bytes, got {len(data)}"
            )
        self._identifier = data
        return self

    def counter(self, counter: int):
        """Set the starting counter value."""
        self._counter = self._check_range("counter", counter)
        return self

    def limit(self, limit: int):
        """Set the maximum number of nonces the sequence may produce."""
        self._limit = self._check_range("limit", limit)
        return self

    def build(self):
        """Build the nonce sequence from the configured values."""
        return self._PRODUCT(self._limit, self._identifier, self._counter)


class Counter32(_Counter):
    """An 8-byte identifier followed by a 32-bit big-endian counter."""

    _COUNTER_BYTES = 4
    _ID_BYTES = NONCE_LEN - 4

    def advance(self) -> Nonce:
        return super().advance()


class Counter64(_Counter):
    """A 4-byte identifier followed by a 64-bit big-endian counter."""

    _COUNTER_BYTES = 8
    _ID_BYTES = NONCE_LEN - 8

    def advance(self) -> Nonce:
        return super().advance()


class Counter32Builder(_CounterBuilder):
    """Builds a ``Counter32``; by default zero identifier, counter 0, limit 2**32-1."""

    _COUNTER_BYTES = 4
    _ID_BYTES = NONCE_LEN - 4
    _PRODUCT = Counter32

    def identifier(self, identifier: bytes | bytearray | memoryview) -> Counter32Builder:
        return super().identifier(identifier)

    def counter(self, counter: int) -> Counter32Builder:
        return super().counter(counter)

    def limit(self, limit: int) -> Counter32Builder:
        return super().limit(limit)

    def build(self) -> Counter32:
        return super().build()


class Counter64Builder(_CounterBuilder):
    """Builds a ``Counter64``; by default zero identifier, counter 0, limit 2**64-1."""

    _COUNTER_BYTES = 8
    _ID_BYTES = NONCE_LEN - 8
    _PRODUCT = Counter64

    def identifier(self, identifier: bytes | bytearray | memoryview) -> Counter64Builder:
        return super().identifier(identifier)

    def counter(self, counter: int) -> Counter64Builder:
        return super().counter(counter)

    def limit(self, limit: int) -> Counter64Builder:
        return super().limit(limit)

    def build(self) -> Counter64:
        return super().build()