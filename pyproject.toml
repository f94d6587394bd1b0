[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sealkit"
version = "0.1.0"
description = "Authenticated encryption with nonce sequences, OpenSSH ChaCha20-Poly1305, QUIC header protection and small cipher and digest tools"
requires-python = ">=3.10"
keywords = ["aead", "aes-gcm", "chacha20-poly1305", "poly1305", "quic", "nonce", "cryptography"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]
dependencies = ["cryptography"]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sealkit-cipher = "sealkit.cipher_cli:main"
sealkit-digest = "sealkit.digest_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sealkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
