"""Best-effort content digests."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

log = logging.getLogger(__name__)

HASH_ALGORITHM = "sha256"
CHUNK_SIZE = 1024 * 1024


def compute_digest(path: Path | str, chunk_size: int = CHUNK_SIZE) -> str | None:
    """Return the lowercase hex SHA-256 of a file, or None if it cannot be read."""
    hasher = hashlib.new(HASH_ALGORITHM)
    try:
        with open(path, "rb") as f:
            while chunk := f.read(chunk_size):
                hasher.update(chunk)
    except OSError as e:
        log.debug("Cannot hash %s: %s", path, e)
        return None
    return hasher.hexdigest()
