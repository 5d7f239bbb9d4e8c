"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Redirect the settings store to a temp directory."""
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "dirchecker" / "settings.json"


@pytest.fixture
def scan_root(tmp_path) -> Path:
    root = tmp_path / "scan"
    root.mkdir()
    return root


@pytest.fixture
def mixed_tree(scan_root) -> Path:
    """A small tree with valid, corrupt, text and unsupported files."""
    (scan_root / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 64)
    (scan_root / "photo.jpg").write_bytes(b"\xff")
    (scan_root / "notes.txt").write_text("hello\n")
    sub = scan_root / "nested" / "deeper"
    sub.mkdir(parents=True)
    (sub / "report.pdf").write_bytes(b"%PDF-1.7\n%%EOF")
    (sub / "broken.zip").write_bytes(b"not a zip")
    (sub / "tool.exe").write_bytes(b"MZ\x90\x00")
    return scan_root
