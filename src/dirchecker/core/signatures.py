"""Central magic-byte signature registry."""

from __future__ import annotations

import logging
from typing import Iterator

from dirchecker.models.rule import ClassificationRule

log = logging.getLogger(__name__)

_TEXT_EXTENSIONS = (".txt", ".csv", ".html", ".json", ".js", ".css", ".scss", ".map")

_ZIP = b"PK"


def normalize_extension(extension: str) -> str:
    """Lowercase an extension and make sure it carries a leading dot."""
    ext = extension.strip().lower()
    if ext and not ext.startswith("."):
        ext = f".{ext}"
    return ext


class SignatureRegistry:
    """Stores classification rules keyed by file extension."""

    def __init__(self) -> None:
        self._rules: dict[str, ClassificationRule] = {}

    def register(self, rule: ClassificationRule) -> None:
        """Register a rule for its extension."""
        ext = normalize_extension(rule.extension)
        if ext in self._rules:
            log.warning("Signature for '%s' already registered, skipping duplicate", ext)
            return
        self._rules[ext] = rule
        log.debug("Registered signature: %s (%s)", ext, rule.label or "text")

    def get(self, extension: str) -> ClassificationRule | None:
        """Get the rule for an extension, or None when unsupported."""
        return self._rules.get(normalize_extension(extension))

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[ClassificationRule]:
        return iter(self._rules.values())

    def __contains__(self, extension: str) -> bool:
        return normalize_extension(extension) in self._rules


def default_registry() -> SignatureRegistry:
    """Build the registry with every built-in format."""
    registry = SignatureRegistry()

    for ext in _TEXT_EXTENSIONS:
        registry.register(ClassificationRule(ext))

    registry.register(ClassificationRule(".pdf", "PDF", prefix=b"%PDF-"))
    for ext in (".jpg", ".jpeg"):
        registry.register(ClassificationRule(ext, "JPEG", prefix=b"\xff\xd8"))
    registry.register(ClassificationRule(".png", "PNG", prefix=b"\x89PNG\r\n\x1a\n", exact=True))
    registry.register(
        ClassificationRule(
            ".gif",
            "GIF",
            prefix=b"GIF8",
            positions={4: frozenset(b"79"), 5: frozenset(b"a")},
        )
    )
    # Office Open XML documents are ZIP containers
    for ext in (".zip", ".docx", ".xlsx", ".pptx"):
        registry.register(ClassificationRule(ext, "ZIP", prefix=_ZIP))
    registry.register(ClassificationRule(".rar", "RAR", prefix=b"Rar!"))
    registry.register(ClassificationRule(".ppt", "PPT", prefix=b"\xd0\xcf\x11\xe0"))

    return registry
