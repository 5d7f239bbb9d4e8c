"""Scan settings, counters and summary."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ScanSettings:
    """Immutable parameters for one scan run."""

    root: Path
    output: Path
    threads: int = 1
    skip_hashes: bool = False

    def __post_init__(self) -> None:
        if self.threads < 1:
            raise ValueError(f"threads must be at least 1, got {self.threads}")


class RunCounters:
    """Processed and corrupt file counts for a single scan.

    Updated concurrently by worker threads; every update happens under one
    lock so no increment is lost.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._processed = 0
        self._corrupt = 0

    def record(self, corrupt: bool) -> tuple[int, int]:
        """Count one finished file and return the updated (processed, corrupt)."""
        with self._lock:
            self._processed += 1
            if corrupt:
                self._corrupt += 1
            return self._processed, self._corrupt

    def snapshot(self) -> tuple[int, int]:
        with self._lock:
            return self._processed, self._corrupt


@dataclass(slots=True)
class ScanSummary:
    """Final result of a scan."""

    processed: int = 0
    corrupt: int = 0
    output: Path | None = None
    elapsed: float = 0.0
