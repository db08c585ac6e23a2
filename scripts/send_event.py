#!/usr/bin/env python3
"""Send one analytics event (or a JSON batch) to an Eye Metric endpoint.

Usage::

    python scripts/send_event.py --endpoint https://metrics.example.com signup --prop plan=pro
    python scripts/send_event.py --endpoint https://metrics.example.com --batch-file events.json

The API key is read from ``--api-key`` or the ``EYE_METRIC_API_KEY`` env var
(``.env`` files are honoured).  Exit status is 0 on success, 1 on failure.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import pathlib
import sys
from typing import Any, Dict, List, Optional

# Ensure project root is on PYTHONPATH so `import eye_metric` works when the
# script is executed directly (e.g. `python scripts/send_event.py`).
PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from eye_metric import AnalyticsClient, EyeMetricError  # noqa: E402
from eye_metric.utils.logger import configure_logging, logger  # noqa: E402


def _parse_props(pairs: List[str]) -> Dict[str, Any]:
    """Turn ``key=value`` strings into a dict; values are JSON-decoded when possible."""
    props: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"expected key=value, got {pair!r}")
        try:
            props[key] = json.loads(raw)
        except json.JSONDecodeError:
            props[key] = raw
    return props


async def _run(args: argparse.Namespace) -> None:
    client = AnalyticsClient(
        endpoint=args.endpoint,
        api_key=args.api_key,
        distinct_id=args.distinct_id,
        timeout=args.timeout,
    )
    if args.batch_file:
        events = json.loads(args.batch_file.read_text(encoding="utf-8"))
        await client.capture_batch(events)
        print(f"Sent {len(events)} events as {client.get_distinct_id()}")
    else:
        await client.capture(args.event, _parse_props(args.prop))
        print(f"Sent {args.event!r} as {client.get_distinct_id()}")


def main(argv: Optional[List[str]] = None) -> int:  # noqa: D401
    parser = argparse.ArgumentParser(description="Send analytics events to Eye Metric")
    parser.add_argument("event", nargs="?", help="Event name (omit with --batch-file)")
    parser.add_argument("--endpoint", required=True, help="Base URL of the Eye Metric API")
    parser.add_argument("--api-key", help="API key (defaults to EYE_METRIC_API_KEY)")
    parser.add_argument("--distinct-id", help="Distinct ID to send events as")
    parser.add_argument("--prop", action="append", default=[], metavar="KEY=VALUE", help="Event property")
    parser.add_argument("--batch-file", type=pathlib.Path, help="JSON file holding a list of events")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    args = parser.parse_args(argv)

    if not args.event and not args.batch_file:
        parser.error("an event name or --batch-file is required")

    configure_logging()
    try:
        asyncio.run(_run(args))
    except (EyeMetricError, argparse.ArgumentTypeError, OSError, ValueError) as exc:
        logger.error("analytics.cli_failed", extra={"error": str(exc)})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
