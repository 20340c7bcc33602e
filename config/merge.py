"""Config merging helpers."""

from __future__ import annotations

from typing import Any, Dict


def merge_dicts(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge overrides into base."""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_env(raw: Dict[str, Any], env: Dict[str, str], env_keys: Dict[str, str]) -> Dict[str, Any]:
    """Overlay non-empty environment variables onto the ``rt`` section.

    Args:
        raw: Raw config dictionary.
        env: Environment mapping, usually ``os.environ``.
        env_keys: Env var name -> ``rt`` setting name.

    Returns:
        New raw dictionary.
    """
    rt_overrides = {setting: env[name] for name, setting in env_keys.items() if env.get(name)}
    if not rt_overrides:
        return dict(raw)
    return merge_dicts(raw, {"rt": rt_overrides})
