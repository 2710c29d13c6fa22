# =============================================================
#  scoped_config_manager/sources.py
# =============================================================
"""Read-only value sources consulted while loading settings."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional
from urllib.parse import unquote_plus

__all__ = ["QueryParams", "parse_query_string", "coerce_query_value"]

# name -> raw string, or None for a bare ``name`` without ``=``
QueryParams = Mapping[str, Optional[str]]

_BOOLEAN_LITERALS = {"true": True, "false": False}


def parse_query_string(url: str) -> Dict[str, Optional[str]]:
    """Flatten the query string of ``url`` into ``{name: value}``.

    ``url`` may be a full URL or just the part after ``?``; anything after
    ``#`` is dropped. A name without ``=`` maps to ``None``; when a name
    repeats, the last occurrence wins.
    """
    query = url.split("?", 1)[1] if "?" in url else url
    query = query.split("#", 1)[0]
    params: Dict[str, Optional[str]] = {}
    for pair in query.split("&"):
        if not pair:
            continue
        name, sep, value = pair.partition("=")
        params[unquote_plus(name)] = unquote_plus(value) if sep else None
    return params


def coerce_query_value(raw: Optional[str]) -> Any:
    """Normalise a raw query-string value.

    The exact literals ``"true"`` and ``"false"`` become booleans; every
    other string is returned untouched. ``None`` and ``""`` mean "not given"
    and come back as ``None``.
    """
    if raw is None or raw == "":
        return None
    return _BOOLEAN_LITERALS.get(raw, raw)
