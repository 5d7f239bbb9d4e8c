"""Header-based structural integrity checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from dirchecker.core.signatures import SignatureRegistry, default_registry, normalize_extension
from dirchecker.models.rule import HEADER_SIZE
from dirchecker.utils import os_error_text

log = logging.getLogger(__name__)

UNSUPPORTED = "unsupported extension"


@dataclass(frozen=True, slots=True)
class Classification:
    """Outcome of a signature check."""

    is_corrupt: bool
    reason: str = ""


class SignatureClassifier:
    """Decides whether a file header matches its declared format.

    Unsupported extensions are never judged corrupt.  Formats without a
    magic number (plain text, markup, code) always pass.
    """

    def __init__(self, registry: SignatureRegistry | None = None) -> None:
        self.registry = registry if registry is not None else default_registry()

    def supports(self, extension: str) -> bool:
        return extension in self.registry

    def classify(self, extension: str, header: bytes) -> Classification:
        """Classify a header read from a file with the given extension."""
        rule = self.registry.get(extension)
        if rule is None:
            return Classification(False, UNSUPPORTED)
        if not rule.has_signature:
            return Classification(False)

        padded = header[:HEADER_SIZE].ljust(HEADER_SIZE, b"\x00")
        if rule.matches(padded):
            return Classification(False)
        return Classification(True, f"Invalid {rule.label} header")

    def check_integrity(self, path: Path) -> Classification:
        """Read the header of ``path`` and classify it.

        I/O failures are reported as a corrupt classification carrying the
        error text; nothing is raised.
        """
        extension = normalize_extension(path.suffix)
        if not self.supports(extension):
            return Classification(False, UNSUPPORTED)

        try:
            header = read_header(path)
        except OSError as e:
            log.debug("Cannot read header of %s: %s", path, e)
            return Classification(True, os_error_text(e))

        return self.classify(extension, header)


def read_header(path: Path, size: int = HEADER_SIZE) -> bytes:
    """Read up to ``size`` bytes from the start of a file."""
    with open(path, "rb") as f:
        return f.read(size)

