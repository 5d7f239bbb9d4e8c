"""Per-file scan record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dirchecker.utils import printable_text


@dataclass(frozen=True, slots=True)
class FileRecord:
    """Verification outcome for a single scanned file.

    ``error`` is set if and only if ``corrupt`` is true.
    """

    name: str
    path: str
    size: int
    last_modified: str | None
    scanned_at: str
    extension: str
    digest: str | None = None
    corrupt: bool = False
    error: str | None = None
    has_invalid_chars: bool = False

    def __post_init__(self) -> None:
        if self.corrupt and not self.error:
            raise ValueError("corrupt record requires an error message")
        if not self.corrupt and self.error is not None:
            raise ValueError("error message is only allowed on corrupt records")

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object written to the output document.

        Names that are not valid UTF-8 are written with replacement
        characters so the document always encodes.
        """
        return {
            "name": printable_text(self.name),
            "path": printable_text(self.path),
            "size": self.size,
            "lastModified": self.last_modified,
            "revisionDate": self.scanned_at,
            "fileExtension": printable_text(self.extension),
            "hash": self.digest,
            "isCorrupt": self.corrupt,
            "errorMessage": printable_text(self.error) if self.error is not None else None,
            "hasInvalidChars": self.has_invalid_chars,
        }
