#!/usr/bin/env python3
"""CLI entrypoint for adding Rotten Tomatoes scores to a movie CSV."""

from __future__ import annotations

import requests

from cli import parse_cli
from config import load_config
from core.records import InputError
from core.run import enrich_records
from file_io.csv_table import read_table, write_table
from logger import get_logger
from rt.client import RtQueryError, RtSearchClient

log = get_logger()


def main(argv: list[str] | None = None) -> int:
    """Run the CLI entrypoint.

    Returns:
        Process exit code.
    """
    options = parse_cli(argv)
    log.set_level(options.log_level)

    if not options.input_path.exists() or not options.input_path.is_file():
        log.error(f"Not a file: {options.input_path}")
        return 2
    if options.config_path:
        if not options.config_path.exists():
            log.error(f"Config path not found: {options.config_path}")
            return 2
        if options.config_path.is_dir():
            log.error(f"Config path must be a file: {options.config_path}")
            return 2

    try:
        cfg = load_config(options.config_path)
    except ValueError as exc:
        log.error(f"Invalid config: {exc}")
        return 2
    if options.delay is not None:
        cfg.rt.request_delay_seconds = options.delay

    log.info("Reading CSV...")
    movies = read_table(options.input_path)
    client = RtSearchClient(cfg.rt)
    try:
        movies_with_scores, summary = enrich_records(movies, client.search_hits, cfg)
    except (InputError, RtQueryError) as exc:
        log.error(str(exc))
        return 1
    except requests.RequestException as exc:
        log.error(f"RT Query Failed: {exc}")
        return 1

    log.info(
        f"Matched {summary.matched}, fixed {summary.overridden}, missed {summary.missed} of {summary.total} movie(s)."
    )
    if options.dry_run:
        log.info("Dry run: CSV not written.")
        return 0

    log.info("Updating CSV...")
    write_table(options.output_path, movies_with_scores)
    log.info("Done.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
