"""Configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass
class RtConfig:
    """Rotten Tomatoes search settings.

    The endpoint URL, user token, user agent and query params are copied
    from a browser search request on rottentomatoes.com and go stale.
    """

    endpoint_url: str = ""
    user_token: str = ""
    user_agent: str = ""
    extra_query_params: str = ""
    index_name: str = "content_rt"
    hits_per_page: int = 100
    request_delay_seconds: float = 1.0
    timeout_seconds: float = 20.0


@dataclass
class FieldsConfig:
    """Source column aliases per canonical field."""

    aliases: Dict[str, List[str]] = field(
        default_factory=lambda: {"title": ["name", "title"], "year": ["year"]}
    )


@dataclass
class OutputConfig:
    """Columns that receive the scores."""

    critics_column: str = "RT"
    audience_column: str = "Audience Score"


@dataclass
class Config:
    """Top-level configuration container."""

    rt: RtConfig
    fields: FieldsConfig
    output: OutputConfig
    overrides: Dict[Tuple[str, int], Tuple[Any, Any]] = field(default_factory=dict)
