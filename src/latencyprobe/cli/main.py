# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""latencyprobe CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import ProbeSettings, load_probe_settings
from ..errors import LatencyError, TransportError
from ..http import LatencyRequest, create_default_http_client
from ..log import setup_logging
from ..prober import LatencyProber


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Measure HTTP request latency, excluding redirect hops")
    parser.add_argument("url", help="Target URL to measure")
    parser.add_argument("-X", "--method", default="GET", help="HTTP method (default: GET)")
    parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        metavar="NAME: VALUE",
        help="Extra request header; may be repeated",
    )
    parser.add_argument("-d", "--data", default=None, help="Request body")
    parser.add_argument("--timeout", type=float, default=None, help="Per-hop timeout in seconds (<=0 disables)")
    parser.add_argument("--max-redirects", type=int, default=None, help="Maximum number of redirects to follow")
    parser.add_argument("--max-total-time", type=float, default=None, help="Wall-clock budget for the whole chain")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of a one-line summary",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: LATENCYPROBE_LOG_LEVEL or WARNING)")
    return parser


def parse_header_args(values: list[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"Invalid header {raw!r}, expected 'Name: value'")
        headers[name.strip()] = value.strip()
    return headers


def _print_json(data: dict[str, Any] | Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _print_error(exc: LatencyError) -> None:
    message = f"[latencyprobe] {type(exc).__name__}: {exc}"
    if isinstance(exc, TransportError) and exc.reason:
        message = f"{message} ({exc.reason})"
    print(message, file=sys.stderr)
    if len(exc.trail) > 1:
        print(f"Redirects: {' -> '.join(exc.trail)}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        headers = parse_header_args(args.header)
    except ValueError as exc:
        parser.error(str(exc))

    settings: ProbeSettings = load_probe_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False
    if args.max_redirects is not None:
        settings.max_redirects = args.max_redirects
    if args.max_total_time is not None:
        settings.max_total_time = args.max_total_time

    request = LatencyRequest(
        url=args.url,
        method=args.method.upper(),
        headers=headers or None,
        body=args.data,
        timeout=args.timeout,
    )

    http_client = create_default_http_client(settings)
    try:
        with LatencyProber(settings, http_client=http_client) as prober:
            response = prober.execute(request)
    except LatencyError as exc:
        _print_error(exc)
        return 1
    finally:
        http_client.close()

    if args.json:
        _print_json(response)
    else:
        print(response)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
