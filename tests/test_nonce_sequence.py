import pytest

from sealkit.nonce import Nonce, UnspecifiedError
from sealkit.nonce_sequence import (
    Counter32,
    Counter32Builder,
    Counter64,
    Counter64Builder,
    NonceSequence,
)

U32_MAX = 0xFFFF_FFFF
U64_MAX = 0xFFFF_FFFF_FFFF_FFFF


def test_counter32_identifier():
    ident = bytes([0xA1, 0xB2, 0xC3, 0xD4, 0xA2, 0xB3, 0xC4, 0xD5])
    cns = Counter32Builder().identifier(ident).counter(7).build()
    assert cns.generated == 0
    nonce = cns.advance()
    assert cns.counter == 8
    assert cns.identifier == ident
    assert cns.limit == U32_MAX
    assert cns.generated == 1
    assert bytes(nonce) == ident + bytes([0, 0, 0, 7])
    nonce = cns.advance()
    assert cns.generated == 2
    assert cns.counter == 9
    assert cns.identifier == ident
    assert bytes(nonce) == ident + bytes([0, 0, 0, 8])


def test_counter32():
    cns = Counter32Builder().counter(0x4CB0_16EA).build()
    assert bytes(cns.advance()) == bytes([0] * 8 + [0x4C, 0xB0, 0x16, 0xEA])
    assert bytes(cns.advance()) == bytes([0] * 8 + [0x4C, 0xB0, 0x16, 0xEB])


def test_counter32_int_id():
    cns = Counter32Builder().counter(0x6A).identifier((0x7B).to_bytes(8, "big")).build()
    assert bytes(cns.advance()) == bytes([0, 0, 0, 0, 0, 0, 0, 0x7B, 0, 0, 0, 0x6A])
    assert bytes(cns.advance()) == bytes([0, 0, 0, 0, 0, 0, 0, 0x7B, 0, 0, 0, 0x6B])


def test_counter32_limit():
    cns = Counter32Builder().limit(1).build()
    assert cns.limit == 1
    assert cns.generated == 0
    cns.advance()
    assert cns.generated == 1
    with pytest.raises(UnspecifiedError):
        cns.advance()


def test_counter32_wraps_counter():
    cns = Counter32Builder().counter(U32_MAX).build()
    assert bytes(cns.advance())[8:] == bytes([0xFF] * 4)
    assert bytes(cns.advance())[8:] == bytes(4)
    assert cns.counter == 1


def test_counter32_rejects_bad_identifier_length():
    with pytest.raises(ValueError):
        Counter32Builder().identifier(bytes(4))


def test_counter32_rejects_out_of_range_counter():
    with pytest.raises(ValueError):
        Counter32Builder().counter(1 << 32)


def test_counter64_identifier():
    ident = bytes([0xA1, 0xB2, 0xC3, 0xD4])
    cns = Counter64Builder().identifier(ident).counter(7).build()
    assert cns.generated == 0
    nonce = cns.advance()
    assert cns.counter == 8
    assert cns.identifier == ident
    assert cns.limit == U64_MAX
    assert cns.generated == 1
    assert bytes(nonce) == ident + bytes([0, 0, 0, 0, 0, 0, 0, 7])
    nonce = cns.advance()
    assert cns.generated == 2
    assert cns.counter == 9
    assert cns.identifier == ident
    assert bytes(nonce) == ident + bytes([0, 0, 0, 0, 0, 0, 0, 8])


def test_counter64():
    cns = Counter64Builder().counter(0x0002_4CB0_16EA).build()
    assert bytes(cns.advance()) == bytes(
        [0, 0, 0, 0, 0, 0, 0, 0x02, 0x4C, 0xB0, 0x16, 0xEA]
    )
    assert bytes(cns.advance()) == bytes(
        [0, 0, 0, 0, 0, 0, 0, 0x02, 0x4C, 0xB0, 0x16, 0xEB]
    )


def test_counter64_id():
    cns = Counter64Builder().counter(0x6A).identifier((0x7B).to_bytes(4, "big")).build()
    assert bytes(cns.advance()) == bytes([0, 0, 0, 0x7B, 0, 0, 0, 0, 0, 0, 0, 0x6A])
    assert bytes(cns.advance()) == bytes([0, 0, 0, 0x7B, 0, 0, 0, 0, 0, 0, 0, 0x6B])


def test_counter64_limit():
    cns = Counter64Builder().limit(1).build()
    assert cns.limit == 1
    assert cns.generated == 0
    cns.advance()
    assert cns.generated == 1
    with pytest.raises(UnspecifiedError):
        cns.advance()


def test_limit_failure_is_sticky():
    cns = Counter64Builder().limit(0).build()
    for _ in range(3):
        with pytest.raises(UnspecifiedError):
            cns.advance()
    assert cns.generated == 3


def test_builders_produce_expected_types():
    c32 = Counter32Builder().build()
    c64 = Counter64Builder().build()
    assert isinstance(c32, Counter32) and isinstance(c32, NonceSequence)
    assert isinstance(c64, Counter64) and isinstance(c64, NonceSequence)
    assert bytes(c32.advance()) == bytes(12)
    assert bytes(c64.advance()) == bytes(12)


class _Fixed(NonceSequence):
    def __init__(self, value):
        self.value = value

    def advance(self):
        return Nonce.assume_unique_for_key(self.value[:12])


def test_custom_nonce_sequence():
    seq = _Fixed(bytes(range(16)))
    expected = Nonce.assume_unique_for_key(bytes(range(12)))
    assert bytes(seq.advance()) == bytes(expected)
    assert bytes(seq.advance()) == bytes(range(12))


def test_abstract_sequence_cannot_be_instantiated():
    with pytest.raises(TypeError):
        NonceSequence()