"""Concurrent scan orchestration engine."""

from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from dirchecker.core.evaluator import FileEvaluator
from dirchecker.core.sink import JsonArraySink
from dirchecker.models.file_record import FileRecord
from dirchecker.models.scan import RunCounters, ScanSettings, ScanSummary
from dirchecker.utils import iter_files

log = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]  # (processed, corrupt)
RecordCallback = Callable[[FileRecord], None]

PROGRESS_EVERY = 10


class ScanError(Exception):
    """Base class for errors that abort a whole scan."""


class SetupError(ScanError):
    """Raised before any work is dispatched (bad root, unwritable output)."""


class OutputError(ScanError):
    """Raised when the output document can no longer be written."""


class ScanEngine:
    """Walks a tree and verifies every file on a bounded thread pool."""

    def __init__(self, evaluator: FileEvaluator | None = None) -> None:
        self.evaluator = evaluator or FileEvaluator()

    def scan(
        self,
        settings: ScanSettings,
        on_progress: ProgressCallback | None = None,
        on_record: RecordCallback | None = None,
    ) -> ScanSummary:
        """Scan ``settings.root`` and write one JSON record per file.

        Args:
            settings: Root, output path, worker count and digest flag.
            on_progress: Optional callback fired on every 10th finished file.
            on_record: Optional callback fired after each record is written.

        Returns:
            Final processed and corrupt counts.

        Raises:
            SetupError: The root is not a readable directory or the output
                cannot be opened.
            OutputError: Writing the output failed part-way through.
        """
        root = Path(settings.root)
        if not root.is_dir():
            raise SetupError(f"Invalid directory path: {root}")
        try:
            with os.scandir(root):
                pass
        except OSError as e:
            raise SetupError(f"Cannot read directory {root}: {e}") from e

        try:
            stream = open(settings.output, "w", encoding="utf-8")
        except OSError as e:
            raise SetupError(f"Cannot open output file {settings.output}: {e}") from e

        log.info("Scanning %s with %d worker(s)", root, settings.threads)
        start = time.monotonic()
        counters = RunCounters()

        with stream:
            sink = JsonArraySink(stream)
            try:
                sink.open()
                self._run(root, settings, sink, counters, on_progress, on_record)
                sink.close()
            except (OSError, UnicodeEncodeError) as e:
                raise OutputError(f"Failed writing {settings.output}: {e}") from e

        processed, corrupt = counters.snapshot()
        elapsed = time.monotonic() - start
        log.info("Scan finished: %d files, %d corrupt in %.2fs", processed, corrupt, elapsed)
        return ScanSummary(
            processed=processed,
            corrupt=corrupt,
            output=Path(settings.output),
            elapsed=elapsed,
        )

    def _run(
        self,
        root: Path,
        settings: ScanSettings,
        sink: JsonArraySink,
        counters: RunCounters,
        on_progress: ProgressCallback | None,
        on_record: RecordCallback | None,
    ) -> None:
        """Feed enumerated files to the pool, at most ``threads`` in flight."""
        slots = threading.BoundedSemaphore(settings.threads)
        failures: list[BaseException] = []
        failures_lock = threading.Lock()
        with_digest = not settings.skip_hashes

        def _process(path: Path) -> None:
            try:
                record = self.evaluator.evaluate(path, with_digest)
            except Exception as exc:
                log.exception("Evaluation of '%s' failed", path)
                record = self.evaluator.failure(path, exc)

            sink.append(record)
            processed, corrupt = counters.record(record.corrupt)
            if on_record:
                on_record(record)
            if on_progress and processed % PROGRESS_EVERY == 0:
                on_progress(processed, corrupt)

        def _done(future: Future) -> None:
            slots.release()
            exc = future.exception()
            if exc is not None:
                with failures_lock:
                    failures.append(exc)

        with ThreadPoolExecutor(max_workers=settings.threads) as executor:
            for path in iter_files(root, exclude={Path(settings.output)}):
                slots.acquire()
                with failures_lock:
                    if failures:
                        break
                executor.submit(_process, path).add_done_callback(_done)

        if failures:
            raise failures[0]
