"""Candidate selection for matching a movie against search index hits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from rapidfuzz import fuzz

from core.normalize import normalize, same_title


# Release years in the index drift (re-releases, regional dates), so the
# first pass only rejects candidates a decade or more away.
LOOSE_YEAR_WINDOW = 10
CLOSE_YEAR_WINDOW = 2

NO_SCORE = ""


@dataclass(frozen=True)
class MovieQuery:
    """Movie to look up."""

    title: str
    year: int


def as_year(value: Any) -> int | None:
    """Coerce a release year value to int, or None when it is unusable."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return int(text)
    return None


def _as_titles(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v]
    return []


@dataclass(frozen=True)
class CandidateHit:
    """One search index result."""

    title: str
    aka_titles: Tuple[str, ...] = ()
    release_year: int | None = None
    critics_score: Any = None
    audience_score: Any = None

    @classmethod
    def from_hit(cls, hit: Any) -> "CandidateHit":
        """Build a candidate from a raw index hit.

        Accepts the index shape (`titles`, `aka`, nested `rottenTomatoes`
        scores) and the flat shape (`akaTitles`, top-level `criticsScore` and
        `audienceScore`). A hit without a usable title or year yields a
        candidate that no query can match, so one bad hit never aborts a lookup.
        """
        if not isinstance(hit, Mapping):
            return cls(title="")
        title = hit.get("title")
        scores = hit.get("rottenTomatoes")
        if not isinstance(scores, Mapping):
            scores = hit
        return cls(
            title=str(title) if title else "",
            aka_titles=tuple(
                _as_titles(hit.get("akaTitles")) + _as_titles(hit.get("titles")) + _as_titles(hit.get("aka"))
            ),
            release_year=as_year(hit.get("releaseYear")),
            critics_score=scores.get("criticsScore"),
            audience_score=scores.get("audienceScore"),
        )

    @property
    def all_titles(self) -> List[str]:
        titles = [self.title] if self.title else []
        return titles + [t for t in self.aka_titles if t]


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a lookup: the chosen hit (if any) and its scores."""

    hit: CandidateHit | None
    critics_score: Any = None
    audience_score: Any = None
    source: str = "none"

    @classmethod
    def none(cls) -> "MatchResult":
        return cls(hit=None)

    @classmethod
    def from_candidate(cls, hit: CandidateHit) -> "MatchResult":
        return cls(
            hit=hit,
            critics_score=hit.critics_score,
            audience_score=hit.audience_score,
            source="search",
        )

    @classmethod
    def from_override(cls, critics_score: Any, audience_score: Any) -> "MatchResult":
        return cls(hit=None, critics_score=critics_score, audience_score=audience_score, source="override")

    @property
    def matched(self) -> bool:
        return self.source != "none"

    def as_scores(self) -> Dict[str, Any]:
        """Return the scores with ``""`` standing in for missing values."""
        return {
            "criticsScore": NO_SCORE if self.critics_score is None else self.critics_score,
            "audienceScore": NO_SCORE if self.audience_score is None else self.audience_score,
        }


def _as_candidates(candidates: Iterable[Any]) -> List[CandidateHit]:
    return [c if isinstance(c, CandidateHit) else CandidateHit.from_hit(c) for c in candidates or []]


def loose_matches(query: MovieQuery, candidates: Iterable[Any]) -> List[CandidateHit]:
    """Return candidates within the loose year window sharing any title key.

    Upstream order is preserved.
    """
    kept: List[CandidateHit] = []
    for hit in _as_candidates(candidates):
        # Aliases alone do not identify a hit without a primary title.
        if not hit.title:
            continue
        if hit.release_year is None or abs(query.year - hit.release_year) >= LOOSE_YEAR_WINDOW:
            continue
        if any(same_title(t, query.title) for t in hit.all_titles):
            kept.append(hit)
    return kept


def select_best(query: MovieQuery, matches: List[CandidateHit]) -> CandidateHit | None:
    """Pick one hit from loose matches using ordered tie-break rules.

    Rules, first one with any hit wins: exact year, year off by one, exact
    primary title key, then whatever the index ranked first.
    """
    if not matches:
        return None
    rules = (
        lambda h: h.release_year == query.year,
        lambda h: abs(h.release_year - query.year) < CLOSE_YEAR_WINDOW,
        lambda h: same_title(h.title, query.title),
    )
    for rule in rules:
        found = next((h for h in matches if rule(h)), None)
        if found is not None:
            return found
    return matches[0]


def match(query: MovieQuery, candidates: Iterable[Any]) -> MatchResult:
    """Match a movie against index hits.

    Args:
        query: Movie title and year.
        candidates: Hits in index order, as CandidateHit or raw hit dicts.

    Returns:
        MatchResult for the winning hit, or ``MatchResult.none()``.
    """
    best = select_best(query, loose_matches(query, candidates))
    if best is None:
        return MatchResult.none()
    return MatchResult.from_candidate(best)


def closest_title(query: MovieQuery, candidates: Iterable[Any]) -> Tuple[CandidateHit, str, float] | None:
    """Find the hit title nearest to the query, ignoring years.

    Only used to explain misses in logs.

    Returns:
        Tuple of (hit, title, similarity in [0, 1]) or None without titles.
    """
    target = normalize(query.title)
    best: Tuple[CandidateHit, str, float] | None = None
    for hit in _as_candidates(candidates):
        for title in hit.all_titles:
            score = fuzz.QRatio(target, normalize(title)) / 100.0
            if best is None or score > best[2]:
                best = (hit, title, score)
    return best
