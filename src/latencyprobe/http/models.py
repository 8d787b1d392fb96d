# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request descriptor and measurement result models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from .headers import drop_header, set_header

Headers = dict[str, str]


def format_seconds(value: float | None) -> str:
    if value is None:
        return "none"
    return f"{value:.3f}s"


@dataclass(frozen=True)
class LatencyRequest:
    """
    Immutable description of the request whose latency is measured.

    Every hop of a redirect chain works on its own derived copy, so the
    caller's instance is never changed by a measurement.
    """

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None

    def with_target(self, url: str) -> LatencyRequest:
        """Derive the request for a redirect target; Host is re-derived from the new URL."""
        headers = drop_header(self.headers, "Host")
        return replace(self, url=url, headers=headers or None)

    def with_header(self, name: str, value: str) -> LatencyRequest:
        return replace(self, headers=set_header(self.headers, name, value))

    def __str__(self) -> str:
        return f"{self.method} {self.url}, timeout is {format_seconds(self.timeout)}"


@dataclass
class LatencyResponse:
    """
    Outcome of a measurement: the terminal response plus the redirect trail that led to it.

    `redirects` starts with the request URL exactly as given. Every later entry is the
    Location value resolved against the hop that sent it and normalized by httpx.URL
    (lowercased host, default port dropped, unsafe characters percent-encoded), i.e. the
    URL the next hop was actually sent to, not the raw header text.
    """

    request: LatencyRequest
    status_code: int
    latency: float
    redirects: list[str] = field(default_factory=list)
    headers: Headers = field(default_factory=dict)
    url: str | None = None
    http_version: str = "HTTP/1.1"
    body_bytes: int = 0

    @property
    def latency_ms(self) -> float:
        return self.latency * 1000.0

    @property
    def redirect_count(self) -> int:
        return max(0, len(self.redirects) - 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.request.method,
            "url": self.url or self.request.url,
            "status_code": self.status_code,
            "http_version": self.http_version,
            "latency": self.latency,
            "latency_ms": round(self.latency_ms, 3),
            "redirects": list(self.redirects),
            "redirect_count": self.redirect_count,
            "headers": dict(self.headers),
            "body_bytes": self.body_bytes,
        }

    def __str__(self) -> str:
        if len(self.redirects) > 1:
            return f"{self.request.method} {' -> '.join(self.redirects)} {format_seconds(self.latency)}"
        return f"{self.request.method} {self.request.url} {format_seconds(self.latency)}"


__all__ = ["Headers", "LatencyRequest", "LatencyResponse", "format_seconds"]
