# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from collections.abc import Iterator
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    httpx wraps the low-level socket and ssl errors, so the cause chain is
    inspected before the httpx class itself.
    """
    chain = list(_exception_chain(exc))

    if any(isinstance(item, (socket.gaierror, socket.herror)) for item in chain):
        return ErrorCategory.DNS_ERROR

    if any(isinstance(item, (ssl_module.SSLError, ssl_module.CertificateError)) for item in chain):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout during measurement",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Network error during measurement",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Measurement failed due to network error")


class LatencyError(Exception):
    """Base class for every failure raised by a latency measurement."""

    def __init__(self, message: str, *, trail: list[str] | None = None):
        super().__init__(message)
        self.trail: list[str] = list(trail or [])


class TransportError(LatencyError):
    """A hop failed below HTTP: connect, timeout, DNS, TLS or protocol error."""

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
        url: str | None = None,
        trail: list[str] | None = None,
    ):
        super().__init__(message, trail=trail)
        self.category = category
        self.url = url

    @property
    def reason(self) -> str:
        return error_category_to_reason(self.category)


class MissingRedirectLocation(LatencyError):
    """The server answered with a redirect status but no usable Location header."""

    def __init__(self, status_code: int, url: str, *, trail: list[str] | None = None):
        super().__init__(f"No redirect location given for {status_code} response from {url}", trail=trail)
        self.status_code = status_code
        self.url = url


class InvalidRedirectTarget(LatencyError):
    """The Location header could not be turned into a requestable URL."""

    def __init__(self, location: str, detail: str = "", *, trail: list[str] | None = None):
        message = f"Invalid redirect target {location!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, trail=trail)
        self.location = location


class TooManyRedirects(LatencyError):
    """The redirect chain is longer than the configured bound (or loops)."""

    def __init__(self, max_redirects: int, *, trail: list[str] | None = None):
        super().__init__(f"Exceeded maximum of {max_redirects} redirects", trail=trail)
        self.max_redirects = max_redirects


__all__ = [
    "ErrorCategory",
    "InvalidRedirectTarget",
    "LatencyError",
    "MissingRedirectLocation",
    "TooManyRedirects",
    "TransportError",
    "categorize_exception",
    "error_category_to_reason",
]
