"""Rotten Tomatoes search index client."""

from __future__ import annotations

import re
from typing import Any, Dict, List

import requests

from config.models import RtConfig


RT_ORIGIN = "https://www.rottentomatoes.com"

_HITS_PER_PAGE_RE = re.compile(r"hitsPerPage=\d+")


class RtQueryError(RuntimeError):
    """The search index answered with an error status."""

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        super().__init__(f"RT Query Failed [{status}]: {message}")


def build_query_params(extra_query_params: str, hits_per_page: int) -> str:
    """Return the copied query params with the page size forced.

    Args:
        extra_query_params: URL-encoded params copied from a browser request.
        hits_per_page: Page size to request.

    Returns:
        Params string containing exactly one ``hitsPerPage``.
    """
    params = extra_query_params or ""
    if _HITS_PER_PAGE_RE.search(params):
        return _HITS_PER_PAGE_RE.sub(f"hitsPerPage={hits_per_page}", params)
    if params:
        return f"{params}&hitsPerPage={hits_per_page}"
    return f"hitsPerPage={hits_per_page}"


def build_request_body(index_name: str, params: str, title: str) -> Dict[str, Any]:
    """Build the multi-query request payload for one title."""
    return {
        "requests": [
            {
                "indexName": index_name,
                "params": params,
                "query": title,
            }
        ]
    }


def extract_hits(payload: Any) -> List[Any]:
    """Return the hits of the first result set, or [] if there are none."""
    if not isinstance(payload, dict):
        return []
    results = payload.get("results") or []
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        return []
    hits = results[0].get("hits") or []
    return hits if isinstance(hits, list) else []


def _failure_message(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return str(data)


class RtSearchClient:
    """Posts title searches to the Rotten Tomatoes search index."""

    def __init__(self, config: RtConfig, session: requests.Session | None = None) -> None:
        self._config = config
        self._session = session or requests.Session()
        self._params = build_query_params(config.extra_query_params, config.hits_per_page)

    def headers(self) -> Dict[str, str]:
        return {
            "Origin": RT_ORIGIN,
            "Referer": f"{RT_ORIGIN}/",
            "User-Agent": self._config.user_agent,
            "x-algolia-usertoken": self._config.user_token,
        }

    def search(self, title: str) -> Dict[str, Any]:
        """Run one search and return the raw JSON payload.

        Raises:
            RtQueryError: If the index responds with a status above 299.
        """
        resp = self._session.post(
            self._config.endpoint_url,
            headers=self.headers(),
            json=build_request_body(self._config.index_name, self._params, title),
            timeout=self._config.timeout_seconds,
        )
        if resp.status_code > 299:
            raise RtQueryError(resp.status_code, _failure_message(resp))
        return resp.json()

    def search_hits(self, title: str) -> List[Any]:
        """Run one search and return its hits in index order."""
        return extract_hits(self.search(title))
