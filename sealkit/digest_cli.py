"""Print the checksum of files, or of standard input, with a chosen digest."""

from __future__ import annotations

import argparse
import enum
import sys
from collections.abc import Sequence
from functools import partial
from typing import BinaryIO

from cryptography.hazmat.primitives import hashes

__all__ = ["BUFFER_SIZE", "DigestType", "process", "main"]

BUFFER_SIZE = 4096


class DigestType(enum.Enum):
    """Digest algorithms the command can compute; values are the CLI names."""

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    SHA512_256 = "sha512-256"

    def hash_algorithm(self) -> hashes.HashAlgorithm:
        """A fresh hash algorithm instance for this digest type."""
        return _ALGORITHMS[self]()


_ALGORITHMS = {
    DigestType.SHA1: hashes.SHA1,
    DigestType.SHA256: hashes.SHA256,
    DigestType.SHA384: hashes.SHA384,
    DigestType.SHA512: hashes.SHA512,
    DigestType.SHA512_256: hashes.SHA512_256,
}


def process(algorithm: DigestType, stream: BinaryIO, name: str) -> bytes:
    """Digest everything read from ``stream``, print ``<hex> <name>``, return the digest."""
    context = hashes.Hash(algorithm.hash_algorithm())
    for chunk in iter(partial(stream.read, BUFFER_SIZE), b""):
        context.update(chunk)
    digest = context.finalize()
    print(f"{digest.hex()} {name}")
    return digest


def _describe(exc: OSError) -> str:
    return exc.strerror or str(exc)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    parser = argparse.ArgumentParser(prog="digest", description="Display file checksums.")
    parser.add_argument(
        "-d", "--digest", choices=[kind.value for kind in DigestType], default=None
    )
    parser.add_argument("files", nargs="*")
    args = parser.parse_args(argv)

    algorithm = DigestType(args.digest) if args.digest else DigestType.SHA1
    failed = False

    if not args.files:
        try:
            process(algorithm, sys.stdin.buffer, "-")
        except OSError as exc:
            print(f"digest: -: {_describe(exc)}")
            failed = True
    else:
        for file_name in args.files:
            try:
                with open(file_name, "rb") as stream:
                    process(algorithm, stream, file_name)
            except OSError as exc:
                print(f"digest: {file_name}: {_describe(exc)}")
                failed = True

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())