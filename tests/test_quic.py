import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDFExpand

from sealkit.nonce import UnspecifiedError
from sealkit.quic import AES_128, AES_256, CHACHA20, HeaderProtectionKey


@pytest.mark.parametrize(
    "alg,key_hex,sample_hex,mask_hex",
    [
        (
            AES_128,
            "9f50449e04a0e810283a1e9933adedd2",
            "d1b1c98dd7689fb8ec11d242b123dc9b",
            "437b9aec36",
        ),
        (
            AES_128,
            "c206b8d9b9f0f37644430b490eeaa314",
            "2cd0991cd25b0aac406a5816b6394100",
            "2ec0d8356a",
        ),
        (
            CHACHA20,
            "25a282b9e82f06f21f488917a4fc8f1b73573685608597d0efcb076b0ab7a7a4",
            "5e5cd55c41f69080575d7999c25a5bfb",
            "aefefe7d03",
        ),
        (AES_128, "00" * 16, "00" * 16, "66e94bd4ef"),
        (AES_256, "00" * 32, "00" * 16, "dc95c078a2"),
    ],
)
def test_known_masks(alg, key_hex, sample_hex, mask_hex):
    key = HeaderProtectionKey(alg, bytes.fromhex(key_hex))
    assert key.new_mask(bytes.fromhex(sample_hex)) == bytes.fromhex(mask_hex)


@pytest.mark.parametrize("alg", [AES_128, AES_256, CHACHA20])
def test_sample_len(alg):
    key = HeaderProtectionKey(alg, bytes(alg.key_len))
    sample = bytes(18)
    assert len(key.new_mask(sample[:16])) == 5
    with pytest.raises(UnspecifiedError):
        key.new_mask(sample[:15])
    with pytest.raises(UnspecifiedError):
        key.new_mask(sample[:17])
    with pytest.raises(UnspecifiedError):
        key.new_mask(b"")


@pytest.mark.parametrize(
    "alg,key_len", [(AES_128, 16), (AES_256, 32), (CHACHA20, 32)]
)
def test_algorithm_properties(alg, key_len):
    hpk = HeaderProtectionKey(alg, bytes(key_len))
    assert (hpk.algorithm.key_len, hpk.algorithm.sample_len) == (key_len, 16)
    assert hpk.algorithm == alg
    other = HeaderProtectionKey(AES_128 if alg != AES_128 else AES_256, bytes(48 - key_len))
    assert other.algorithm != hpk.algorithm


def test_key_from_hkdf_output():
    key_bytes = bytes.fromhex("d480429666d48b400633921c5407d1d1")
    info = bytes.fromhex("f0f1f2f3f4f5f6f7f8f9")
    okm = HKDFExpand(hashes.SHA256(), AES_128.key_len, info).derive(key_bytes)
    hpk = HeaderProtectionKey(AES_128, okm)
    assert hpk.algorithm == AES_128
    sample = bytes.fromhex("b0b1b2b3b4b5b6b7b8b9babbbcbdbebf")
    assert hpk.new_mask(sample) == HeaderProtectionKey(AES_128, okm).new_mask(sample)
    assert len(hpk.new_mask(sample)) == 5


@pytest.mark.parametrize("alg,length", [(AES_128, 32), (AES_256, 16), (CHACHA20, 16)])
def test_wrong_key_length_rejected(alg, length):
    with pytest.raises(UnspecifiedError):
        HeaderProtectionKey(alg, bytes(length))