"""Command-line parsing helpers."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path


@dataclass
class RunOptions:
    """Parsed CLI options used by the run pipeline."""

    input_path: Path
    output_path: Path
    config_path: Path | None
    delay: float | None
    dry_run: bool
    log_level: str


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Add Rotten Tomatoes critics and audience scores to a CSV of movies."
    )
    parser.add_argument("csv", help="CSV file with name/title and year columns")
    parser.add_argument("--output", help="Write the updated CSV here instead of over the input")
    parser.add_argument("--config", help="Path to a config.json file")
    parser.add_argument("--delay", type=float, help="Seconds to wait before each search request")
    parser.add_argument("--dry-run", action="store_true", help="Look up scores without writing the CSV")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARN", "ERROR"],
        type=str.upper,
        help="Console log level (default: INFO)",
    )
    return parser.parse_args(argv)


def resolve_config_path(args: argparse.Namespace) -> Path | None:
    """Resolve the config path from CLI arguments.

    Falls back to ``config.json`` in the working directory when present.
    """
    if args.config:
        return Path(args.config).expanduser().resolve()
    default_file = Path.cwd() / "config.json"
    if default_file.exists():
        return default_file.resolve()
    return None


def parse_cli(argv: list[str] | None = None) -> RunOptions:
    """Parse command-line arguments into RunOptions."""
    args = _parse_args(argv)
    input_path = Path(args.csv).expanduser().resolve()
    output_path = Path(args.output).expanduser().resolve() if args.output else input_path
    return RunOptions(
        input_path=input_path,
        output_path=output_path,
        config_path=resolve_config_path(args),
        delay=args.delay,
        dry_run=bool(args.dry_run),
        log_level=args.log_level,
    )
