"""Shared utility functions."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

log = logging.getLogger(__name__)


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def default_thread_count() -> int:
    """Available parallelism minus one, never below one."""
    return max(1, (os.cpu_count() or 1) - 1)


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def timestamp_to_iso(timestamp: float) -> str:
    """Convert a POSIX timestamp to a UTC ISO-8601 string."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


def iter_files(root: Path | str, exclude: set[Path] | None = None) -> Iterator[Path]:
    """Lazily yield every regular file below ``root``.

    Walks with an explicit ``os.scandir`` stack so the tree is never
    materialised up front.  Symlinks to files are yielded; symlinked
    directories are not descended into.  Directories that cannot be
    listed are skipped.
    """
    skip = {p.resolve() for p in exclude} if exclude else set()
    stack: list[Path | str] = [root]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_file():
                            path = Path(entry.path)
                            if skip and path.resolve() in skip:
                                continue
                            yield path
                        elif entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                    except OSError as e:
                        log.debug("Cannot inspect %s: %s", entry.path, e)
        except OSError as e:
            log.debug("Cannot list directory %s: %s", current, e)


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time as a human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds) // 60
    secs = seconds - minutes * 60
    return f"{minutes}m {secs:.0f}s"


def os_error_text(exc: OSError) -> str:
    """Readable message for an OSError, including the offending path."""
    if exc.strerror and exc.filename:
        return f"{exc.strerror}: {exc.filename}"
    return str(exc) or type(exc).__name__


def printable_text(text: str) -> str:
    """Make a filesystem-derived string safe to encode as UTF-8.

    Undecodable name bytes (surrogate escapes) become U+FFFD.
    """
    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", "backslashreplace").decode("utf-8")
    return raw.decode("utf-8", "replace")
