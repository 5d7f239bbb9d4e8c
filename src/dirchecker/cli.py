"""CLI interface for Dirchecker."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import click

from dirchecker.core.classifier import SignatureClassifier
from dirchecker.core.engine import ScanEngine, ScanError
from dirchecker.models.scan import ScanSettings
from dirchecker.settings import Settings, SettingsError
from dirchecker.utils import default_thread_count, format_elapsed


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _default_output(directory: Path) -> Path:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    return directory / f"file_check_log_{stamp}.json"


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """Dirchecker — scan a directory tree for corrupt files."""
    _setup_logging(verbose)


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@click.option(
    "--directory", "-d",
    prompt="📂 Enter the directory path to scan",
    help="Directory to scan recursively",
)
@click.option("--output", "-o", default=None, help="JSON output path (default: inside the scanned directory)")
@click.option("--threads", "-t", type=click.IntRange(min=1), default=None, help="Worker threads")
@click.option("--skip-hashes", is_flag=True, help="Do not compute SHA-256 digests")
def scan(directory: str, output: str | None, threads: int | None, skip_hashes: bool) -> None:
    """Verify every file under a directory and write a JSON report."""
    stored = Settings()
    root = Path(directory.strip())
    out_path = Path(output) if output else _default_output(root)

    settings = ScanSettings(
        root=root,
        output=out_path,
        threads=threads if threads is not None else stored.threads(default_thread_count()),
        skip_hashes=skip_hashes or stored.skip_hashes(),
    )

    def on_progress(processed: int, corrupt: int) -> None:
        click.echo(f"\r🔍 Scanning... {processed} files | ❌ {corrupt} corrupt", nl=False)

    click.echo(f"⏳ Scanning {root}...")
    try:
        summary = ScanEngine().scan(settings, on_progress=on_progress)
    except ScanError as e:
        click.echo(f"{click.style('❌', fg='red')} {e}", err=True)
        sys.exit(1)

    click.echo(f"\n📊 Total: {summary.processed} files | ❌ Corrupt: {summary.corrupt}")
    click.echo(
        f"\n{click.style('✅', fg='green')} Scan completed in "
        f"{click.style(format_elapsed(summary.elapsed), bold=True)}"
    )
    click.echo(f"📄 Results saved to: {summary.output}")


# ── formats ──────────────────────────────────────────────────────────────

@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def formats(as_json: bool) -> None:
    """List supported file extensions and their header checks."""
    rules = sorted(SignatureClassifier().registry, key=lambda r: r.extension)

    if as_json:
        data = [
            {
                "extension": r.extension,
                "format": r.label or None,
                "check": r.describe(),
            }
            for r in rules
        ]
        click.echo(json.dumps(data, indent=2))
        return

    for rule in rules:
        label = click.style(rule.label, fg="cyan", bold=True) if rule.label else click.style("text", fg="bright_black")
        click.echo(f"  {rule.extension:8s} {label:20s} {rule.describe()}")


# ── config ───────────────────────────────────────────────────────────────

@main.group()
def config() -> None:
    """Read or change stored scan defaults."""


@config.command("get")
@click.argument("key", type=click.Choice(Settings.known_keys()))
def config_get(key: str) -> None:
    """Print a stored setting."""
    value = Settings().get(key)
    if value is None:
        click.echo(f"Setting '{key}' is not set.", err=True)
        sys.exit(1)
    click.echo(json.dumps(value))


@config.command("set")
@click.argument("key", type=click.Choice(Settings.known_keys()))
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Store a setting (VALUE is parsed as JSON, e.g. 4 or true)."""
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    settings = Settings()
    try:
        settings.set(key, parsed)
    except SettingsError as e:
        click.echo(f"{click.style('❌', fg='red')} {e}", err=True)
        sys.exit(1)
    click.echo(f"{key} = {json.dumps(parsed)}  ({settings.path})")
