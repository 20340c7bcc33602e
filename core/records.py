"""Resolve movie title and year from loosely keyed table rows."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from core.matching import MovieQuery, as_year


# Canonical field -> accepted source column names, in priority order.
DEFAULT_FIELD_ALIASES: Dict[str, List[str]] = {
    "title": ["name", "title"],
    "year": ["year"],
}


class InputError(ValueError):
    """A row is missing a field needed to look up the movie."""

    def __init__(self, position: int, total: int, message: str) -> None:
        self.position = position
        self.total = total
        super().__init__(f"[{position}/{total}]: {message}")


def resolve_field(
    record: Mapping[str, Any],
    canonical: str,
    aliases: Mapping[str, List[str]] | None = None,
) -> Any:
    """Return the value of the first alias present in the record.

    Keys match case-insensitively. When a row has several spellings of one
    key, "Name", then "name", then "NAME" win over other casings.

    Raises:
        ValueError: If the canonical field has no alias list.
    """
    table = DEFAULT_FIELD_ALIASES if aliases is None else aliases
    possible_keys = table.get(canonical)
    if not isinstance(possible_keys, list):
        raise ValueError(f'Field aliases must list source keys for "{canonical}"')

    for key in possible_keys:
        preferred = (key[:1].upper() + key[1:].lower(), key, key.upper())
        for variant in preferred:
            if variant in record:
                return record[variant]
        lowered = key.lower()
        for record_key, value in record.items():
            if str(record_key).lower() == lowered:
                return value
    return None


def resolve_query(
    record: Mapping[str, Any],
    position: int,
    total: int,
    aliases: Mapping[str, List[str]] | None = None,
) -> MovieQuery:
    """Build a MovieQuery from a row.

    Args:
        record: Table row.
        position: 1-based row position, used in error messages.
        total: Number of rows in the batch.
        aliases: Field alias table; defaults to DEFAULT_FIELD_ALIASES.

    Raises:
        InputError: If the title or year is missing, or the year is not a number.
    """
    title = resolve_field(record, "title", aliases)
    if title is None or not str(title).strip():
        raise InputError(position, total, "No title found for movie!")
    title = str(title).strip()

    raw_year = resolve_field(record, "year", aliases)
    if raw_year is None or not str(raw_year).strip():
        raise InputError(position, total, f"No year found for {title}!")
    year = as_year(raw_year)
    if year is None:
        raise InputError(position, total, f"Bad year {raw_year!r} for {title}!")
    return MovieQuery(title=title, year=year)
