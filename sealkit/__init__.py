"""AEAD keys with nonce sequences, Poly1305, SSH ChaCha20-Poly1305, QUIC header protection and cipher and digest tools."""

__version__ = "0.1.0"

__all__ = [
    "aead",
    "aead_key",
    "cipher_cli",
    "digest_cli",
    "nonce",
    "nonce_sequence",
    "openssh",
    "poly1305",
    "quic",
]