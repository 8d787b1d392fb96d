# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Hop client abstraction, redirect policy and factory."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

import httpx

from ..config import ProbeSettings, load_probe_settings
from .headers import header_value
from .models import LatencyRequest

REDIRECT_STATUS_CODES = frozenset({301, 302, 303, 307, 308})


class RedirectRefused(Exception):
    """
    Raised by the redirect policy instead of following a redirect.

    The triggering response stays attached so the caller can read its status
    and Location header. Its body has already been closed.
    """

    def __init__(self, response: httpx.Response):
        super().__init__(f"Redirect refused for {response.status_code} response")
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def location(self) -> str:
        return header_value(self.response.headers, "Location")


RedirectPolicy = Callable[[httpx.Response], None]


def refuse_redirects(response: httpx.Response) -> None:
    """Redirect policy that never follows: every redirect status raises RedirectRefused."""
    if response.status_code in REDIRECT_STATUS_CODES:
        raise RedirectRefused(response)


class HopClient(Protocol):
    """Minimal protocol for sending one hop of a measurement."""

    def send(self, request: LatencyRequest, *, timeout: float | None) -> httpx.Response: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_http_client(settings: ProbeSettings | None = None) -> HopClient:
    """Factory for the default httpx-backed hop client."""
    from .httpx_client import HttpxHopClient

    return HttpxHopClient(settings or load_probe_settings())


__all__ = [
    "REDIRECT_STATUS_CODES",
    "HopClient",
    "RedirectPolicy",
    "RedirectRefused",
    "create_default_http_client",
    "refuse_redirects",
]
