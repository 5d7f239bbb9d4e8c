"""Single-file evaluation: metadata, signature check and digest."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dirchecker.core.classifier import SignatureClassifier
from dirchecker.core.digest import compute_digest
from dirchecker.models.file_record import FileRecord
from dirchecker.utils import os_error_text, timestamp_to_iso, utc_now_iso

log = logging.getLogger(__name__)

_WINDOWS_INVALID = frozenset('<>:"/\\|?*') | frozenset(chr(i) for i in range(32))
_POSIX_INVALID = frozenset("/\x00")


def invalid_name_chars() -> frozenset[str]:
    """Characters the host filesystem forbids in file names."""
    return _WINDOWS_INVALID if os.name == "nt" else _POSIX_INVALID


def has_invalid_chars(name: str) -> bool:
    """Whether a file name contains a character illegal on this host."""
    forbidden = invalid_name_chars()
    return any(ch in forbidden for ch in name)


class FileEvaluator:
    """Builds a FileRecord for one path.

    Holds only read-only state, so one instance can be shared by every
    worker thread.
    """

    def __init__(self, classifier: SignatureClassifier | None = None) -> None:
        self.classifier = classifier or SignatureClassifier()

    def evaluate(self, path: Path, with_digest: bool = True) -> FileRecord:
        """Evaluate a file.  Never raises for per-file failures."""
        path = Path(path).absolute()
        extension = path.suffix.lower()

        size = 0
        last_modified: str | None = None
        metadata_error: str | None = None
        try:
            st = path.stat()
            size = st.st_size
            last_modified = timestamp_to_iso(st.st_mtime)
        except OSError as e:
            log.debug("Cannot stat %s: %s", path, e)
            metadata_error = os_error_text(e)

        result = self.classifier.check_integrity(path)
        corrupt = result.is_corrupt
        error = result.reason if corrupt else None
        if metadata_error and not corrupt:
            corrupt, error = True, metadata_error

        digest = compute_digest(path) if with_digest else None

        return FileRecord(
            name=path.name,
            path=str(path),
            size=size,
            last_modified=last_modified,
            scanned_at=utc_now_iso(),
            extension=extension,
            digest=digest,
            corrupt=corrupt,
            error=error,
            has_invalid_chars=has_invalid_chars(path.name),
        )

    def failure(self, path: Path, exc: BaseException) -> FileRecord:
        """Record for a file whose evaluation crashed unexpectedly."""
        path = Path(path).absolute()
        return FileRecord(
            name=path.name,
            path=str(path),
            size=0,
            last_modified=None,
            scanned_at=utc_now_iso(),
            extension=path.suffix.lower(),
            corrupt=True,
            error=str(exc) or type(exc).__name__,
            has_invalid_chars=has_invalid_chars(path.name),
        )
