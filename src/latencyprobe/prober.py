# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Redirect-aware latency measurement.

The prober refuses every redirect the server issues, re-sends the request to
the redirect target by hand and records each visited URL. Only the final,
non-redirecting hop is timed, and the timer stops as soon as the response
headers arrive, before the body is drained.
"""

from __future__ import annotations

import logging
import time
from contextlib import suppress

import httpx

from .config import ProbeSettings, load_probe_settings
from .errors import (
    ErrorCategory,
    InvalidRedirectTarget,
    MissingRedirectLocation,
    TooManyRedirects,
    TransportError,
    categorize_exception,
)
from .http.client import HopClient, RedirectRefused, create_default_http_client
from .http.headers import normalize_headers
from .http.models import Headers, LatencyRequest, LatencyResponse
from .http.url import resolve_redirect_target

logger = logging.getLogger(__name__)

CACHE_CONTROL_HEADER = "Cache-Control"
CACHE_CONTROL_VALUE = "no-cache"


class LatencyProber:
    """
    Measures the latency of a request, following redirects without timing them.

    A prober keeps no state between measurements; each `execute` call works on
    its own request chain and trail.
    """

    def __init__(self, settings: ProbeSettings | None = None, http_client: HopClient | None = None):
        self.settings = settings or load_probe_settings()
        self._owns_client = http_client is None
        self.http_client = http_client or create_default_http_client(self.settings)

    def execute(
        self,
        request: LatencyRequest,
        timeout: float | None = None,
        *,
        max_total_time: float | None = None,
    ) -> LatencyResponse:
        """
        Measure `request` and return the terminal response with its latency and redirect trail.

        `timeout` is a wall-clock limit for each hop, covering the send and,
        on the terminal hop, draining the body. It falls back to
        `request.timeout`, then to the settings; zero or below disables it.
        `max_total_time` (or the matching setting) is a wall-clock limit for
        the whole chain. httpx enforces the remaining time on every connect,
        read and write; the deadline itself is checked when the send returns
        and after each body chunk, raising TransportError with category
        TIMEOUT once it has passed.
        """
        hop_timeout = self._resolve_timeout(request, timeout)
        total_budget = max_total_time if max_total_time is not None else self.settings.max_total_time
        deadline = time.monotonic() + total_budget if total_budget and total_budget > 0 else None
        max_redirects = max(0, self.settings.max_redirects)

        trail: list[str] = [str(request.url)]
        current = request

        while True:
            hop = current.with_header(CACHE_CONTROL_HEADER, CACHE_CONTROL_VALUE)
            hop_deadline = _hop_deadline(hop_timeout, deadline, hop.url, trail)
            effective_timeout = None if hop_deadline is None else hop_deadline - time.monotonic()

            started = time.perf_counter()
            try:
                response = self.http_client.send(hop, timeout=effective_timeout)
            except RedirectRefused as refusal:
                _check_deadline(hop_deadline, hop.url, trail)
                location = refusal.location
                logger.debug("%s %s -> %s redirect to %r", hop.method, hop.url, refusal.status_code, location)
                if not location:
                    raise MissingRedirectLocation(refusal.status_code, hop.url, trail=trail) from None
                if len(trail) - 1 >= max_redirects:
                    raise TooManyRedirects(max_redirects, trail=trail) from None
                try:
                    target = resolve_redirect_target(hop.url, location)
                except InvalidRedirectTarget as exc:
                    exc.trail = list(trail)
                    raise
                trail.append(target)
                current = current.with_target(target)
                continue
            except httpx.HTTPError as exc:
                category = categorize_exception(exc)
                logger.debug("%s %s failed (%s): %s", hop.method, hop.url, category.value, exc)
                raise TransportError(
                    str(exc) or type(exc).__name__,
                    category=category,
                    url=hop.url,
                    trail=trail,
                ) from exc
            latency = time.perf_counter() - started

            headers, body_bytes = _drain(response, hop, trail, hop_deadline)
            logger.debug("%s %s -> %s in %.3fs", hop.method, hop.url, response.status_code, latency)
            return LatencyResponse(
                request=hop,
                status_code=response.status_code,
                latency=latency,
                redirects=trail,
                headers=headers,
                url=str(response.url),
                http_version=response.http_version,
                body_bytes=body_bytes,
            )

    def _resolve_timeout(self, request: LatencyRequest, timeout: float | None) -> float | None:
        if timeout is None:
            timeout = request.timeout if request.timeout is not None else self.settings.timeout
        if timeout is None or timeout <= 0:
            return None
        return timeout

    def close(self) -> None:
        if not self._owns_client:
            return
        with suppress(Exception):
            self.http_client.close()

    def __enter__(self) -> LatencyProber:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


def _deadline_exceeded(url: str, trail: list[str]) -> TransportError:
    return TransportError(
        "Measurement time limit exceeded",
        category=ErrorCategory.TIMEOUT,
        url=url,
        trail=trail,
    )


def _hop_deadline(
    timeout: float | None,
    chain_deadline: float | None,
    url: str,
    trail: list[str],
) -> float | None:
    """Monotonic instant by which the hop must finish: its own timeout or the chain deadline, whichever is sooner."""
    now = time.monotonic()
    if chain_deadline is not None and chain_deadline <= now:
        raise _deadline_exceeded(url, trail)
    hop_deadline = now + timeout if timeout is not None else None
    if chain_deadline is None:
        return hop_deadline
    return chain_deadline if hop_deadline is None else min(hop_deadline, chain_deadline)


def _check_deadline(deadline: float | None, url: str, trail: list[str]) -> None:
    if deadline is not None and time.monotonic() > deadline:
        raise _deadline_exceeded(url, trail)


def _drain(
    response: httpx.Response,
    hop: LatencyRequest,
    trail: list[str],
    deadline: float | None,
) -> tuple[Headers, int]:
    """Read the body to the end without keeping it and close the response, within the hop deadline."""
    body_bytes = 0
    try:
        _check_deadline(deadline, hop.url, trail)
        for chunk in response.iter_bytes():
            body_bytes += len(chunk)
            _check_deadline(deadline, hop.url, trail)
    except httpx.HTTPError as exc:
        raise TransportError(
            str(exc) or type(exc).__name__,
            category=categorize_exception(exc),
            url=hop.url,
            trail=trail,
        ) from exc
    finally:
        response.close()
    return normalize_headers(response.headers), body_bytes


def measure_latency(
    url: str,
    *,
    method: str = "GET",
    headers: Headers | None = None,
    body: bytes | str | None = None,
    timeout: float | None = None,
    settings: ProbeSettings | None = None,
) -> LatencyResponse:
    """Measure a single request with a short-lived prober."""
    request = LatencyRequest(url=url, method=method, headers=headers, body=body, timeout=timeout)
    with LatencyProber(settings) as prober:
        return prober.execute(request)


__all__ = ["CACHE_CONTROL_HEADER", "CACHE_CONTROL_VALUE", "LatencyProber", "measure_latency"]
