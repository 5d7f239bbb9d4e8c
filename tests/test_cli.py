"""Tests for the command-line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from dirchecker.cli import main


@pytest.fixture
def runner():
    return CliRunner()


class TestScanCommand:
    def test_scan_writes_report(self, runner, mixed_tree, tmp_path):
        output = tmp_path / "report.json"
        result = runner.invoke(
            main, ["scan", "--directory", str(mixed_tree), "--output", str(output), "--threads", "2"]
        )

        assert result.exit_code == 0, result.output
        assert "Total: 6 files" in result.output
        assert "Corrupt: 2" in result.output
        assert str(output) in result.output
        assert len(json.loads(output.read_text(encoding="utf-8"))) == 6

    def test_default_output_inside_directory(self, runner, mixed_tree):
        result = runner.invoke(main, ["scan", "-d", str(mixed_tree)])

        assert result.exit_code == 0, result.output
        logs = list(mixed_tree.glob("file_check_log_*.json"))
        assert len(logs) == 1
        assert len(json.loads(logs[0].read_text(encoding="utf-8"))) == 6

    def test_prompts_for_directory(self, runner, mixed_tree, tmp_path):
        output = tmp_path / "report.json"
        result = runner.invoke(main, ["scan", "--output", str(output)], input=f"{mixed_tree}\n")

        assert result.exit_code == 0, result.output
        assert "Enter the directory path to scan" in result.output
        assert output.exists()

    def test_invalid_directory(self, runner, tmp_path):
        output = tmp_path / "report.json"
        result = runner.invoke(main, ["scan", "-d", str(tmp_path / "missing"), "-o", str(output)])

        assert result.exit_code == 1
        assert "Invalid directory path" in result.output
        assert not output.exists()

    def test_rejects_zero_threads(self, runner, mixed_tree):
        result = runner.invoke(main, ["scan", "-d", str(mixed_tree), "--threads", "0"])
        assert result.exit_code == 2

    def test_skip_hashes_flag(self, runner, mixed_tree, tmp_path):
        output = tmp_path / "report.json"
        result = runner.invoke(main, ["scan", "-d", str(mixed_tree), "-o", str(output), "--skip-hashes"])

        assert result.exit_code == 0, result.output
        assert all(r["hash"] is None for r in json.loads(output.read_text(encoding="utf-8")))

    def test_stored_skip_hashes_default(self, runner, mixed_tree, tmp_path):
        runner.invoke(main, ["config", "set", "scan.skip_hashes", "true"])
        output = tmp_path / "report.json"
        result = runner.invoke(main, ["scan", "-d", str(mixed_tree), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert all(r["hash"] is None for r in json.loads(output.read_text(encoding="utf-8")))


class TestFormatsCommand:
    def test_json(self, runner):
        result = runner.invoke(main, ["formats", "--json"])

        assert result.exit_code == 0
        data = {d["extension"]: d for d in json.loads(result.output)}
        assert data[".png"]["format"] == "PNG"
        assert data[".docx"]["format"] == "ZIP"
        assert data[".txt"]["format"] is None
        assert data[".txt"]["check"] == "no signature check"

    def test_text(self, runner):
        result = runner.invoke(main, ["formats"])
        assert result.exit_code == 0
        assert ".pdf" in result.output
        assert "prefix 25 50 44 46 2D" in result.output


class TestConfigCommand:
    def test_set_then_get(self, runner, isolate_config):
        result = runner.invoke(main, ["config", "set", "scan.threads", "3"])
        assert result.exit_code == 0, result.output
        assert json.loads(isolate_config.read_text()) == {"scan": {"threads": 3}}

        result = runner.invoke(main, ["config", "get", "scan.threads"])
        assert result.exit_code == 0
        assert result.output.strip() == "3"

    def test_unknown_key(self, runner, isolate_config):
        result = runner.invoke(main, ["config", "set", "scan.label", "nightly"])
        assert result.exit_code == 2
        assert not isolate_config.exists()

    def test_invalid_value(self, runner, isolate_config):
        result = runner.invoke(main, ["config", "set", "scan.threads", "zero"])
        assert result.exit_code == 1
        assert "positive integer" in result.output
        assert not isolate_config.exists()

    def test_set_flag(self, runner):
        runner.invoke(main, ["config", "set", "scan.skip_hashes", "true"])
        result = runner.invoke(main, ["config", "get", "scan.skip_hashes"])
        assert result.output.strip() == "true"

    def test_get_missing(self, runner):
        result = runner.invoke(main, ["config", "get", "scan.threads"])
        assert result.exit_code == 1
        assert "not set" in result.output
