# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HopClient implementation."""

from __future__ import annotations

import httpx

from ..config import ProbeSettings, load_probe_settings
from .client import HopClient, RedirectPolicy, refuse_redirects
from .headers import header_value
from .models import LatencyRequest

REDIRECT_POLICY_EXTENSION = "latencyprobe.redirect_policy"


def apply_redirect_policy(response: httpx.Response) -> None:
    """httpx response hook running the redirect policy the request was sent with."""
    policy = response.request.extensions.get(REDIRECT_POLICY_EXTENSION)
    if policy is not None:
        policy(response)


class HttpxHopClient(HopClient):
    """
    Synchronous httpx client wrapper that hands redirect decisions to a policy.

    The policy runs from an httpx response event hook, which fires before httpx
    looks at the Location header, so a refusal surfaces as the policy's own
    exception and httpx closes the response body on the way out. The policy
    travels with each request, so several wrappers may share one httpx.Client
    and the hook is installed on it only once.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        client: httpx.Client | None = None,
        *,
        redirect_policy: RedirectPolicy = refuse_redirects,
    ):
        self.settings = settings or load_probe_settings()
        self.redirect_policy = redirect_policy
        if client is None:
            self._client = httpx.Client(
                follow_redirects=False,
                verify=self.settings.verify_ssl,
                event_hooks={"response": [apply_redirect_policy]},
            )
        else:
            self._client = client
            hooks = self._client.event_hooks["response"]
            if apply_redirect_policy not in hooks:
                hooks.append(apply_redirect_policy)

    def send(self, request: LatencyRequest, *, timeout: float | None) -> httpx.Response:
        """Send one hop and return the streamed response once its headers are in; the body is left unread."""
        headers = dict(request.headers or {})
        if not header_value(headers, "User-Agent"):
            headers["User-Agent"] = self.settings.user_agent

        outbound = self._client.build_request(
            request.method,
            request.url,
            headers=headers,
            content=request.body,
            timeout=timeout,
            extensions={REDIRECT_POLICY_EXTENSION: self.redirect_policy},
        )
        return self._client.send(outbound, stream=True, follow_redirects=False)

    def close(self) -> None:
        self._client.close()
