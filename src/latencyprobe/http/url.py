# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for following redirect targets."""

from __future__ import annotations

import httpx

from ..errors import InvalidRedirectTarget

SUPPORTED_SCHEMES = frozenset({"http", "https"})


def resolve_redirect_target(current_url: str, location: str) -> str:
    """
    Turn a Location header value into an absolute URL for the next hop.

    Relative locations are resolved against the URL of the hop that issued the
    redirect. Raises InvalidRedirectTarget when the result is not an http(s)
    URL with a host.
    """
    raw = str(location or "").strip()
    if not raw:
        raise InvalidRedirectTarget(str(location or ""), "empty location")

    try:
        target = httpx.URL(str(current_url)).join(raw)
    except (httpx.InvalidURL, ValueError, TypeError) as exc:
        raise InvalidRedirectTarget(raw, str(exc)) from exc

    if target.scheme not in SUPPORTED_SCHEMES:
        raise InvalidRedirectTarget(raw, f"unsupported scheme {target.scheme!r}")
    if not target.host:
        raise InvalidRedirectTarget(raw, "missing host")
    return str(target)


__all__ = ["SUPPORTED_SCHEMES", "resolve_redirect_target"]
