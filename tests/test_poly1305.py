import pytest

from sealkit.nonce import UnspecifiedError
from sealkit.poly1305 import Context, sign

RFC_KEY = bytes.fromhex(
    "85d6be7857556d337f4452fe42d506a80103808afb0db2fd4abff6af4149f51b"
)
RFC_MSG = b"Cryptographic Forum Research Group"
RFC_TAG = bytes.fromhex("a8061dc1305136c6c22b8baf0c0127a9")


def test_rfc_vector_one_shot():
    assert bytes(sign(RFC_KEY, RFC_MSG)) == RFC_TAG


def test_all_zero_key_and_message_gives_zero_tag():
    assert bytes(sign(bytes(32), bytes(64))) == bytes(16)


def test_incremental_matches_one_shot():
    ctx = Context(RFC_KEY)
    for i in range(0, len(RFC_MSG), 5):
        ctx.update(RFC_MSG[i : i + 5])
    assert bytes(ctx.finish()) == RFC_TAG


def test_different_message_gives_different_tag():
    assert bytes(sign(RFC_KEY, RFC_MSG + b"!")) != RFC_TAG
    assert len(sign(RFC_KEY, b"")) == 16


@pytest.mark.parametrize("length", [0, 16, 31, 33])
def test_wrong_key_length_rejected(length):
    with pytest.raises(UnspecifiedError):
        Context(bytes(length))