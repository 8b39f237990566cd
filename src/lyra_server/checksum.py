# SPDX-License-Identifier: MIT
"""SHA-256 digests for indexed archives."""

import hashlib
from pathlib import Path
from typing import BinaryIO

CHUNK_SIZE = 8192


def compute_sha256_stream(stream: BinaryIO) -> str:
    """Digest a binary stream, reading it in ``CHUNK_SIZE`` pieces."""
    sha256 = hashlib.sha256()
    for chunk in iter(lambda: stream.read(CHUNK_SIZE), b""):
        sha256.update(chunk)
    return sha256.hexdigest()


def compute_sha256_file(file_path: Path) -> str:
    """Digest an archive on disk without loading it into memory.

    Args:
        file_path: Archive to hash

    Returns:
        64 lowercase hex characters

    Raises:
        OSError: If the archive cannot be opened or read
    """
    with open(file_path, "rb") as f:
        return compute_sha256_stream(f)
