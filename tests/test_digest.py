"""Tests for content digests."""

from __future__ import annotations

import hashlib

from dirchecker.core.digest import compute_digest

ABC_SHA256 = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


class TestComputeDigest:
    def test_known_value(self, tmp_path):
        path = tmp_path / "abc.txt"
        path.write_bytes(b"abc")
        assert compute_digest(path) == ABC_SHA256

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty"
        path.touch()
        assert compute_digest(path) == EMPTY_SHA256

    def test_chunked_read_matches_whole(self, tmp_path):
        data = bytes(range(256)) * 513
        path = tmp_path / "blob.bin"
        path.write_bytes(data)
        assert compute_digest(path, chunk_size=1000) == hashlib.sha256(data).hexdigest()

    def test_stable_across_runs(self, tmp_path):
        path = tmp_path / "doc.pdf"
        path.write_bytes(b"%PDF-1.4 stable content")
        assert compute_digest(path) == compute_digest(path)

    def test_lowercase_hex(self, tmp_path):
        path = tmp_path / "x"
        path.write_bytes(b"\xff" * 10)
        digest = compute_digest(path)
        assert len(digest) == 64
        assert digest == digest.lower()
        int(digest, 16)

    def test_missing_file_returns_none(self, tmp_path):
        assert compute_digest(tmp_path / "nope") is None

    def test_directory_returns_none(self, tmp_path):
        assert compute_digest(tmp_path) is None
