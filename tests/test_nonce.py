import pytest

from sealkit.nonce import IV_LEN, NONCE_LEN, Nonce, UnspecifiedError


def test_nonce_from_byte_array():
    iv = bytes(range(1, IV_LEN + 1))
    nonce = Nonce.from_iv(iv)
    assert bytes(nonce) == bytes([1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12])


def test_from_iv_wrong_length():
    with pytest.raises(UnspecifiedError):
        Nonce.from_iv(bytes(12))


def test_nonce_len_is_twelve():
    assert NONCE_LEN == 12
    assert len(Nonce(bytes(12))) == 12


def test_try_assume_unique_for_key_accepts_twelve_bytes():
    value = bytes(range(12))
    assert bytes(Nonce.try_assume_unique_for_key(value)) == value


@pytest.mark.parametrize("length", [0, 11, 13, 16])
def test_try_assume_unique_for_key_rejects_other_lengths(length):
    with pytest.raises(UnspecifiedError):
        Nonce.try_assume_unique_for_key(bytes(length))


def test_assume_unique_for_key_roundtrip():
    value = bytes([43, 177, 114, 110, 129, 186, 1, 92, 12, 167, 248, 103])
    assert bytes(Nonce.assume_unique_for_key(value)) == value


def test_from_big_endian_u32():
    nonce = Nonce.from_big_endian_u32(0x01020304)
    assert bytes(nonce) == bytes(8) + bytes([1, 2, 3, 4])


def test_from_big_endian_u32_out_of_range():
    with pytest.raises(UnspecifiedError):
        Nonce.from_big_endian_u32(1 << 32)


def test_from_u32_words_little_endian_layout():
    nonce = Nonce.from_u32_words([45, 897, 4567])
    assert bytes(nonce).hex() == "2d00000081030000d7110000"


def test_from_u32_words_wrong_count():
    with pytest.raises(UnspecifiedError):
        Nonce.from_u32_words([1, 2])


def test_equality():
    assert Nonce(bytes(12)) == Nonce(bytearray(12))
    assert not Nonce(bytes(12)) == Nonce(bytes([1]) + bytes(11))