# sealkit

Authenticated encryption (AEAD) built around nonce sequences, a few related
primitives, and two small command-line tools.

## Modules

- `sealkit.nonce`: `Nonce`, the 12-byte value used for one seal or open, and
  `UnspecifiedError`, the `ValueError` subclass raised when an operation fails.
  A `Nonce` can be built from 12 bytes (`assume_unique_for_key`,
  `try_assume_unique_for_key`), from the first 12 bytes of a 16-byte IV
  (`from_iv`), from three 32-bit words (`from_u32_words`) or from a big-endian
  32-bit number after eight zero bytes (`from_big_endian_u32`).
- `sealkit.nonce_sequence`: the abstract `NonceSequence` and two counters.
  `Counter32` puts an 8-byte identifier before a 32-bit big-endian counter;
  `Counter64` puts a 4-byte identifier before a 64-bit one. Configure them with
  `Counter32Builder` / `Counter64Builder` (`identifier`, `counter`, `limit`,
  `build`). `advance()` raises `UnspecifiedError` once the limit is reached.
- `sealkit.aead_key`: the algorithms `AES_128_GCM`, `AES_256_GCM` and
  `CHACHA20_POLY1305` (each an `Algorithm` with `key_len`, `tag_len`,
  `nonce_len`), `Aad`, `Tag` and `UnboundKey`.
- `sealkit.aead`: `SealingKey` and `OpeningKey`, which take a fresh nonce from
  a `NonceSequence` for every call, and `LessSafeKey`, which takes a nonce per
  call.
- `sealkit.poly1305`: the Poly1305 one-time authenticator (`Context`, `sign`).
- `sealkit.openssh`: the SSH ChaCha20-Poly1305 packet construct
  (`SealingKey`, `OpeningKey`, `derive_poly1305_key`).
- `sealkit.quic`: QUIC header protection masks (`HeaderProtectionKey` with the
  algorithms `AES_128`, `AES_256` and `CHACHA20`).

## Install

    pip install .

## Sealing and opening

```python
import secrets

from sealkit.aead import OpeningKey, SealingKey
from sealkit.aead_key import AES_128_GCM, Aad, UnboundKey
from sealkit.nonce_sequence import Counter64Builder

key_bytes = secrets.token_bytes(16)


def sequence():
    return Counter64Builder().identifier(b"\xab\xcd\xef\x01").build()


sealing = SealingKey(UnboundKey(AES_128_GCM, key_bytes), sequence())
buf = bytearray(b"plaintext value")
sealing.seal_in_place_append_tag(Aad("context"), buf)  # buf is now ciphertext || tag

opening = OpeningKey(UnboundKey(AES_128_GCM, key_bytes), sequence())
plaintext = opening.open_in_place(Aad("context"), buf)
assert plaintext == b"plaintext value"
```

`seal_in_place_append_tag` needs a `bytearray` so the tag can be appended;
`seal_in_place_separate_tag` encrypts any writable buffer in place and returns
the `Tag`. `open_within(aad, in_out, start)` opens `in_out[start:]` and moves the
plaintext to the start of the buffer. A wrong key, tag, AAD or nonce raises
`UnspecifiedError`. `seal_in_place` is kept as a deprecated alias and warns
with `DeprecationWarning`.

Use `LessSafeKey` only when you manage nonces yourself; never reuse a nonce
with the same key.

## Command-line tools

Encrypt and decrypt UTF-8 text with AES in CTR or CBC (PKCS#7) mode. The key is
16 or 32 bytes in hex; when no key or IV is given for encryption, random ones
are generated and printed with the ciphertext:

    sealkit-cipher encrypt --mode ctr "Hello World"
    sealkit-cipher decrypt --mode ctr --key <hex key> --iv <hex iv> <hex ciphertext>

On failure the tool prints the reason to standard error and exits with 1.

Print checksums as `<hex digest> <name>`. `-d` accepts `sha1` (the default),
`sha256`, `sha384`, `sha512` and `sha512-256`. With no files, standard input is
read and named `-`:

    sealkit-digest -d sha256 somefile.txt

A file that cannot be read is reported as `digest: <name>: <reason>`, the other
files are still processed, and the exit status is 1.

## What it does not do

There is no general-purpose hashing, HMAC or key-derivation API: digests are
only available through `sealkit-digest`, and keys cannot be derived from HKDF
output. The AES CTR and CBC modes exist only in `sealkit-cipher`, not as a
library of cipher keys.

## Tests

    pip install .[test]
    pytest