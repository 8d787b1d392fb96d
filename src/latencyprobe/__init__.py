# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
latencyprobe package entrypoint.

Measures the latency of a single HTTP request. Redirects are followed by hand
and recorded in a redirect trail, but only the final, non-redirecting hop is
timed. HTTP behavior sits behind an injectable hop client, and requests and
results are modeled with typed dataclasses.
"""

from .config import ProbeSettings, load_probe_settings
from .errors import (
    ErrorCategory,
    InvalidRedirectTarget,
    LatencyError,
    MissingRedirectLocation,
    TooManyRedirects,
    TransportError,
)
from .http import (
    HopClient,
    HttpxHopClient,
    LatencyRequest,
    LatencyResponse,
    RedirectRefused,
    create_default_http_client,
    refuse_redirects,
)
from .log import setup_logging
from .prober import LatencyProber, measure_latency
from .version import __version__

__all__ = [
    "ErrorCategory",
    "HopClient",
    "HttpxHopClient",
    "InvalidRedirectTarget",
    "LatencyError",
    "LatencyProber",
    "LatencyRequest",
    "LatencyResponse",
    "MissingRedirectLocation",
    "ProbeSettings",
    "RedirectRefused",
    "TooManyRedirects",
    "TransportError",
    "create_default_http_client",
    "load_probe_settings",
    "measure_latency",
    "refuse_redirects",
    "setup_logging",
    "__version__",
]
