# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). Requests and measurement
results keep headers as plain dicts, so lookups and overrides go through these helpers
to avoid sending the same field twice under different casings.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """
    Best-effort coercion of "dict-like" header containers into a Mapping.

    Accepts plain dicts, httpx.Headers (via `.items()`) and iterables of pairs.
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        try:
            return dict(items())
        except (TypeError, ValueError):
            pass

    try:
        return dict(headers)
    except (TypeError, ValueError):
        return None


def normalize_headers(headers: Any) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Any, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default

    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return default

    lower = str(name).lower()
    for key, value in coerced.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


def set_header(headers: Mapping[str, str] | None, name: str, value: str) -> dict[str, str]:
    """Return a copy of `headers` with `name` set to `value`, dropping other casings of the same field."""
    lower = name.lower()
    out = {key: val for key, val in (headers or {}).items() if str(key).lower() != lower}
    out[name] = value
    return out


def drop_header(headers: Mapping[str, str] | None, name: str) -> dict[str, str]:
    """Return a copy of `headers` without any casing of `name`."""
    lower = name.lower()
    return {key: val for key, val in (headers or {}).items() if str(key).lower() != lower}


__all__ = ["drop_header", "header_value", "normalize_headers", "set_header"]
