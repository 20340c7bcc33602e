"""Fixed scores for movies the search index cannot find."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Mapping, Tuple

from core.matching import MatchResult, MovieQuery, match
from logger import get_logger

log = get_logger()

OverrideKey = Tuple[str, int]
OverrideScores = Tuple[Any, Any]

# "9" (2009) does not come back for any query, including on the website.
DEFAULT_OVERRIDES: Dict[OverrideKey, OverrideScores] = {
    ("9", 2009): (57, 56),
}


def merge_overrides(extra: Mapping[OverrideKey, OverrideScores] | None = None) -> Dict[OverrideKey, OverrideScores]:
    """Return the default overrides updated with caller entries."""
    merged = dict(DEFAULT_OVERRIDES)
    for (title, year), scores in (extra or {}).items():
        merged[(str(title), int(year))] = (scores[0], scores[1])
    return merged


def overrides_from_list(entries: Iterable[Mapping[str, Any]]) -> Dict[OverrideKey, OverrideScores]:
    """Parse config entries like ``{"title": "9", "year": 2009, "critics": 57, "audience": 56}``.

    Raises:
        ValueError: If an entry lacks a title or an integer year.
    """
    parsed: Dict[OverrideKey, OverrideScores] = {}
    for entry in entries:
        title = entry.get("title")
        year = entry.get("year")
        if not title or year is None:
            raise ValueError(f"Override entry needs title and year: {dict(entry)}")
        try:
            year_value = int(year)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Override entry has a bad year: {dict(entry)}") from exc
        parsed[(str(title), year_value)] = (entry.get("critics"), entry.get("audience"))
    return parsed


def lookup_override(
    title: object,
    year: int,
    overrides: Mapping[OverrideKey, OverrideScores] | None = None,
) -> MatchResult | None:
    """Return a fixed result for a listed (title, year), else None.

    Titles are compared verbatim, not normalized.
    """
    table = DEFAULT_OVERRIDES if overrides is None else overrides
    scores = table.get((str(title), int(year)))
    if scores is None:
        return None
    return MatchResult.from_override(scores[0], scores[1])


def score_movie(
    query: MovieQuery,
    fetch_hits: Callable[[str], List[Any]],
    overrides: Mapping[OverrideKey, OverrideScores] | None = None,
) -> MatchResult:
    """Look up one movie: override table first, then search and match.

    Args:
        query: Movie title and year.
        fetch_hits: Called with the title, returns hits in index order.
        overrides: Override table; defaults to DEFAULT_OVERRIDES.

    Returns:
        MatchResult for the movie.
    """
    fixed = lookup_override(query.title, query.year, overrides)
    if fixed is not None:
        log.debug(f"Using fixed scores for {query.title} ({query.year}).")
        return fixed
    return match(query, fetch_hits(query.title))
