"""Thread-safe streaming JSON array writer."""

from __future__ import annotations

import json
import logging
import threading
from typing import TextIO

from dirchecker.models.file_record import FileRecord

log = logging.getLogger(__name__)


class JsonArraySink:
    """Writes records from many threads into one JSON array.

    The lock guards both the "first record written" flag and the write
    itself, so separators are never duplicated or dropped and records never
    interleave.  Output order is completion order.

    Layout::

        [
        {...},
        {...}
        ]

    An empty run produces ``[`` newline ``]``.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._lock = threading.Lock()
        self._opened = False
        self._closed = False
        self._count = 0

    @property
    def count(self) -> int:
        """Number of records written so far."""
        with self._lock:
            return self._count

    def open(self) -> None:
        """Write the opening array delimiter."""
        with self._lock:
            if self._opened:
                raise RuntimeError("Sink already opened")
            self._stream.write("[")
            self._opened = True

    def append(self, record: FileRecord) -> None:
        """Serialize and write one record."""
        payload = json.dumps(record.to_dict(), ensure_ascii=False)
        with self._lock:
            if not self._opened or self._closed:
                raise RuntimeError("Sink is not open")
            separator = "\n" if self._count == 0 else ",\n"
            self._stream.write(separator + payload)
            self._count += 1

    def close(self) -> None:
        """Write the closing array delimiter and flush."""
        with self._lock:
            if self._closed:
                return
            if not self._opened:
                raise RuntimeError("Sink was never opened")
            self._stream.write("\n]")
            self._stream.flush()
            self._closed = True
        log.debug("Closed JSON sink after %d records", self._count)

    def __enter__(self) -> JsonArraySink:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
