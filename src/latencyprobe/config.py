# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for latencyprobe."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"latencyprobe/{__version__}"
DEFAULT_MAX_REDIRECTS = 10


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_float_env(name: str, default: float | None) -> float | None:
    try:
        value = os.getenv(name)
        if value is None:
            return default
        parsed = float(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


@dataclass
class ProbeSettings:
    """Latency probe defaults."""

    timeout: float | None = 10.0
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    max_total_time: float | None = None
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("LATENCYPROBE_TIMEOUT", cls.timeout)
        max_redirects = _int_env("LATENCYPROBE_MAX_REDIRECTS", cls.max_redirects)
        if max_redirects < 0:
            max_redirects = cls.max_redirects
        return cls(
            timeout=timeout if timeout > 0 else None,
            max_redirects=max_redirects,
            max_total_time=_optional_float_env("LATENCYPROBE_MAX_TOTAL_TIME", cls.max_total_time),
            user_agent=os.getenv("LATENCYPROBE_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("LATENCYPROBE_VERIFY_SSL", cls.verify_ssl),
        )


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()
