"""Batch enrichment of movie rows with Rotten Tomatoes scores."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Sequence

from config import Config
from core.matching import MatchResult, MovieQuery, closest_title
from core.overrides import merge_overrides, score_movie
from core.records import resolve_query
from logger import get_logger

log = get_logger()


@dataclass
class RunSummary:
    """Aggregate results for a run."""

    matched: int = 0
    overridden: int = 0
    missed: int = 0

    @property
    def total(self) -> int:
        return self.matched + self.overridden + self.missed


def _log_miss(marker: str, query: MovieQuery, hits: List[Any]) -> None:
    nearest = closest_title(query, hits)
    if nearest is None:
        log.info(f"[{marker}]: No results for {query.title} ({query.year}).")
        return
    hit, title, similarity = nearest
    year = hit.release_year if hit.release_year is not None else "?"
    log.info(f"[{marker}]: No match for {query.title} ({query.year}); closest was '{title}' ({year}), similarity {similarity:.2f}.")


def merge_scores(record: Mapping[str, Any], result: MatchResult, cfg: Config) -> Dict[str, Any]:
    """Return a copy of the row with the score columns set."""
    scores = result.as_scores()
    merged = dict(record)
    merged[cfg.output.critics_column] = scores["criticsScore"]
    merged[cfg.output.audience_column] = scores["audienceScore"]
    return merged


def enrich_records(
    records: Sequence[Mapping[str, Any]],
    fetch_hits: Callable[[str], List[Any]],
    cfg: Config,
) -> tuple[List[Dict[str, Any]], RunSummary]:
    """Look up scores for every row, one search at a time.

    Waits ``cfg.rt.request_delay_seconds`` before each search. Rows answered
    by the override table do not search and do not wait.

    Args:
        records: Table rows in file order.
        fetch_hits: Called with a title, returns index hits in order.
        cfg: Loaded configuration.

    Returns:
        Tuple of (rows with score columns, summary).

    Raises:
        InputError: If a row lacks a title or year. No later row is processed.
    """
    overrides = merge_overrides(cfg.overrides)
    delay = max(0.0, float(cfg.rt.request_delay_seconds))
    summary = RunSummary()
    enriched: List[Dict[str, Any]] = []
    total = len(records)

    for index, record in enumerate(records):
        marker = f"{index + 1}/{total}"
        query = resolve_query(record, index + 1, total, cfg.fields.aliases)
        fetched: List[Any] = []

        def fetch(title: str) -> List[Any]:
            if delay:
                time.sleep(delay)
            hits = fetch_hits(title)
            fetched.extend(hits)
            return hits

        log.info(f"[{marker}]: Fetching scores for {query.title} ({query.year})...")
        result = score_movie(query, fetch, overrides)
        if result.source == "override":
            summary.overridden += 1
        elif result.matched:
            summary.matched += 1
            log.debug(f"[{marker}]: Matched '{result.hit.title}' ({result.hit.release_year}).")
        else:
            summary.missed += 1
            _log_miss(marker, query, fetched)
        enriched.append(merge_scores(record, result, cfg))

    return enriched, summary
