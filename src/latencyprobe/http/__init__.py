# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .client import (
    REDIRECT_STATUS_CODES,
    HopClient,
    RedirectPolicy,
    RedirectRefused,
    create_default_http_client,
    refuse_redirects,
)
from .headers import drop_header, header_value, normalize_headers, set_header
from .httpx_client import HttpxHopClient
from .models import Headers, LatencyRequest, LatencyResponse
from .url import resolve_redirect_target

__all__ = [
    "REDIRECT_STATUS_CODES",
    "Headers",
    "HopClient",
    "HttpxHopClient",
    "LatencyRequest",
    "LatencyResponse",
    "RedirectPolicy",
    "RedirectRefused",
    "create_default_http_client",
    "drop_header",
    "header_value",
    "normalize_headers",
    "refuse_redirects",
    "resolve_redirect_target",
    "set_header",
]
