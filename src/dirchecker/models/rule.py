"""Magic-byte classification rule."""

from __future__ import annotations

from dataclasses import dataclass, field

HEADER_SIZE = 8


@dataclass(frozen=True)
class ClassificationRule:
    """Expected header layout for one file extension.

    A rule without a ``prefix`` performs no structural check.  With
    ``exact`` set, the prefix must cover the whole header.  ``positions``
    maps a header offset to the byte values allowed there.
    """

    extension: str
    label: str = ""
    prefix: bytes | None = None
    exact: bool = False
    positions: dict[int, frozenset[int]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.extension.startswith("."):
            raise ValueError(f"Extension must start with a dot: {self.extension!r}")
        if self.prefix is not None and len(self.prefix) > HEADER_SIZE:
            raise ValueError(f"Signature for {self.extension} exceeds {HEADER_SIZE} header bytes")
        if self.exact and (self.prefix is None or len(self.prefix) != HEADER_SIZE):
            raise ValueError(f"Exact signature for {self.extension} must be {HEADER_SIZE} bytes")
        if any(not 0 <= offset < HEADER_SIZE for offset in self.positions):
            raise ValueError(f"Positional constraint outside header for {self.extension}")

    @property
    def has_signature(self) -> bool:
        """Whether this rule checks header bytes at all."""
        return self.prefix is not None or bool(self.positions)

    def matches(self, header: bytes) -> bool:
        """Check a header against this rule."""
        if not self.has_signature:
            return True
        if self.prefix is not None:
            expected = header if self.exact else header[: len(self.prefix)]
            if expected != self.prefix:
                return False
        for offset, allowed in self.positions.items():
            if offset >= len(header) or header[offset] not in allowed:
                return False
        return True

    def describe(self) -> str:
        """Human-readable summary of the check, used by ``dirchecker formats``."""
        if not self.has_signature:
            return "no signature check"
        parts = []
        if self.prefix is not None:
            mode = "exact" if self.exact else "prefix"
            parts.append(f"{mode} {self.prefix.hex(' ').upper()}")
        for offset, allowed in sorted(self.positions.items()):
            values = "|".join(f"{b:02X}" for b in sorted(allowed))
            parts.append(f"byte {offset} in {values}")
        return ", ".join(parts)
