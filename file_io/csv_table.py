"""CSV table reading and writing."""

from __future__ import annotations

import csv
import io
import re
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

_NEWLINES_RE = re.compile(r"\r\n|\n\r|\r")


def last_table(text: str) -> str:
    """Return the last blank-line-separated block of a CSV document.

    Letterboxd list exports start with a small metadata table, followed by
    a blank line and the actual film table.
    """
    return _NEWLINES_RE.sub("\n", text).split("\n\n")[-1]


def parse_table(text: str) -> List[Dict[str, str]]:
    """Parse CSV text with a header row into row dicts."""
    reader = csv.DictReader(io.StringIO(last_table(text)))
    # Cells past the header are dropped.
    return [{k: v for k, v in row.items() if k is not None} for row in reader]


def read_table(path: Path) -> List[Dict[str, str]]:
    """Read a CSV file into row dicts, keeping only its last table."""
    with path.open("r", encoding="utf-8", newline="") as f:
        return parse_table(f.read())


def table_header(rows: Sequence[Mapping[str, object]]) -> List[str]:
    """Union of row keys in first-seen order."""
    header: List[str] = []
    for row in rows:
        for key in row:
            if key not in header:
                header.append(key)
    return header


def write_table(path: Path, rows: Sequence[Mapping[str, object]]) -> None:
    """Write row dicts as CSV, replacing the file."""
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=table_header(rows), restval="")
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
