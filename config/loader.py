"""Configuration loading and normalization."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping

from config.merge import merge_dicts, merge_env
from config.models import Config, FieldsConfig, OutputConfig, RtConfig
from core.overrides import overrides_from_list


BASE_DIR = Path(__file__).resolve().parent.parent
MODULE_CONFIG_PATHS = {
    "rt": BASE_DIR / "rt" / "config.json",
}

# Env var -> rt setting, named after the fields of a copied browser request.
ENV_KEYS = {
    "RT_QUERY_URL": "endpoint_url",
    "RT_QUERY_TOKEN": "user_token",
    "RT_QUERY_AGENT": "user_agent",
    "RT_QUERY_PARAMS": "extra_query_params",
}


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _as_aliases(value: Any) -> Dict[str, List[str]]:
    defaults = FieldsConfig().aliases
    if not isinstance(value, dict):
        return defaults
    aliases = dict(defaults)
    for canonical, keys in value.items():
        if isinstance(keys, str):
            keys = [keys]
        if isinstance(keys, list) and keys:
            aliases[str(canonical)] = [str(k) for k in keys]
    return aliases


def _load_json(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _load_default_sections() -> Dict[str, Any]:
    raw: Dict[str, Any] = {}
    for section, file_path in MODULE_CONFIG_PATHS.items():
        if file_path.exists():
            raw[section] = _load_json(file_path)
    return raw


def config_from_dict(raw: Dict[str, Any]) -> Config:
    """Build a Config instance from a raw dictionary.

    Raises:
        ValueError: If an override entry is malformed.
    """
    rt_raw = raw.get("rt", {}) or {}
    fields_raw = raw.get("fields", {}) or {}
    output_raw = raw.get("output", {}) or {}
    overrides_raw = raw.get("overrides", []) or []

    rt = RtConfig(
        endpoint_url=str(rt_raw.get("endpoint_url", "")),
        user_token=str(rt_raw.get("user_token", "")),
        user_agent=str(rt_raw.get("user_agent", "")),
        extra_query_params=str(rt_raw.get("extra_query_params", "")),
        index_name=str(rt_raw.get("index_name", "content_rt")),
        hits_per_page=_as_int(rt_raw.get("hits_per_page", 100), 100),
        request_delay_seconds=_as_float(rt_raw.get("request_delay_seconds", 1.0), 1.0),
        timeout_seconds=_as_float(rt_raw.get("timeout_seconds", 20.0), 20.0),
    )
    fields = FieldsConfig(aliases=_as_aliases(fields_raw.get("aliases")))
    output = OutputConfig(
        critics_column=str(output_raw.get("critics_column", "RT")),
        audience_column=str(output_raw.get("audience_column", "Audience Score")),
    )
    return Config(
        rt=rt,
        fields=fields,
        output=output,
        overrides=overrides_from_list(overrides_raw),
    )


def load_config(path: Path | None, env: Mapping[str, str] | None = None) -> Config:
    """Load config data into a Config instance.

    Defaults come from the module config files, then the optional user file,
    then the ``RT_QUERY_*`` environment variables.

    Args:
        path: Optional path to a JSON config file containing overrides.
        env: Environment mapping; defaults to ``os.environ``.

    Returns:
        Parsed Config instance.
    """
    raw = _load_default_sections()
    if path is not None:
        raw = merge_dicts(raw, _load_json(path))
    raw = merge_env(raw, dict(os.environ if env is None else env), ENV_KEYS)
    return config_from_dict(raw)
