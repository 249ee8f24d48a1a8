#!/usr/bin/env python3
"""Run a movement relay against an MQTT broker.

Subscribes to the coordinate topic, moves an in-memory object by every
accepted delta, republishes the movement and ``information`` messages,
and prints a summary on exit.

Broker settings come from ``MOVEMENT_RELAY_*`` environment variables;
command-line flags override them.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
import time
from pathlib import Path
from typing import Any

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from movementrelay import MovementResult, RelayClient, RelayConfig, RelayError  # noqa: E402

_LOG = logging.getLogger("run_relay")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Move an object from MQTT coordinate messages and republish its position.",
    )
    parser.add_argument("--host", help="MQTT broker host.")
    parser.add_argument("--port", type=int, help="MQTT broker port.")
    parser.add_argument("--topic", help="Topic carrying '(x, y, z)' movement messages.")
    parser.add_argument("--name", help="Relay name used in log lines.")
    parser.add_argument(
        "--duration",
        type=int,
        default=0,
        help="Maximum runtime in seconds (0 = run until Ctrl+C).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logs.",
    )
    return parser.parse_args()


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    mapping = {
        "broker_host": args.host,
        "broker_port": args.port,
        "subscribe_topic": args.topic,
        "name": args.name,
    }
    return {key: value for key, value in mapping.items() if value is not None}


def _print_result(result: MovementResult) -> None:
    print(f"[relay] moved {result.old_position} -> {result.new_position} by {result.movement}")


async def _run(config: RelayConfig, duration: int) -> RelayClient:
    should_stop = False

    def stop_handler(_signum: int, _frame: Any) -> None:
        nonlocal should_stop
        should_stop = True

    signal.signal(signal.SIGINT, stop_handler)
    signal.signal(signal.SIGTERM, stop_handler)

    started_at = time.monotonic()
    async with RelayClient(config, on_result=_print_result) as client:
        print(f"[relay] {config.name} listening on {config.broker_host}:{config.broker_port} topic={config.subscribe_topic}")
        while not should_stop:
            if duration > 0 and (time.monotonic() - started_at) >= duration:
                print(f"[relay] Reached --duration={duration}s, stopping.")
                break
            await asyncio.sleep(0.5)
    return client


def _print_summary(client: RelayClient) -> None:
    stats = client.stats
    print("[relay] Summary")
    print(f"[relay]   position   : {client.position}")
    print(f"[relay]   processed  : {stats.processed}")
    print(f"[relay]   suppressed : {stats.suppressed}")
    print(f"[relay]   rejected   : {stats.rejected}")
    print(f"[relay]   failed     : {stats.failed}")


def _main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = RelayConfig.from_env(**_overrides(args))
        client = asyncio.run(_run(config, args.duration))
    except RelayError as exc:
        print(f"[relay] Startup failed: {exc}", file=sys.stderr)
        return 2

    _print_summary(client)
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
