"""Command-line utility for querying the store and serving the HTTP API."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Awaitable, Callable, Dict, Optional

from app.deps import AppState, close_app_state, get_app_state
from app.errors import ApiError
from app.services.asninfo_service import search_asninfo
from app.services.broker_service import search_broker
from app.services.peers_service import search_peers
from app.services.roas_service import search_roas
from core.query.fields import InvalidFieldValue


def _tristate(value: str) -> Optional[bool]:
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value}")


async def _run(service: Callable[..., Awaitable[Dict]], params: Dict[str, Any]) -> Dict:
    state: AppState = get_app_state()
    try:
        return await service(state, **params)
    finally:
        await close_app_state()


def _execute(service: Callable[..., Awaitable[Dict]], params: Dict[str, Any]) -> None:
    """Run one search and print the response envelope (or the error body) as JSON."""
    try:
        payload = asyncio.run(_run(service, params))
    except InvalidFieldValue as exc:
        payload = ApiError.bad_request(str(exc)).to_dict()
    except ApiError as exc:
        payload = exc.to_dict()
    print(json.dumps(payload, indent=2))
    if "errors" in payload:
        sys.exit(1)


def cmd_asninfo(args: argparse.Namespace) -> None:
    _execute(
        search_asninfo,
        {
            "asn": args.asn,
            "asns": args.asns,
            "name": args.name,
            "country": args.country,
            "page": args.page,
            "page_size": args.page_size,
        },
    )


def cmd_roas(args: argparse.Namespace) -> None:
    _execute(
        search_roas,
        {
            "asn": args.asn,
            "prefix": args.prefix,
            "tal": args.tal,
            "date": args.date,
            "current": args.current,
            "max_len": args.max_len,
            "page": args.page,
            "page_size": args.page_size,
        },
    )


def cmd_broker(args: argparse.Namespace) -> None:
    _execute(
        search_broker,
        {
            "ts_start": args.ts_start,
            "ts_end": args.ts_end,
            "duration": args.duration,
            "duration_days": args.duration_days,
            "duration_hours": args.duration_hours,
            "duration_minutes": args.duration_minutes,
            "project": args.project,
            "collectors": args.collectors,
            "data_type": args.data_type,
            "page": args.page,
            "page_size": args.page_size,
        },
    )


def cmd_peers(args: argparse.Namespace) -> None:
    _execute(
        search_peers,
        {
            "ip": args.ip,
            "asn": args.asn,
            "date": args.date,
            "collector": args.collector,
            "min_v4": args.min_v4,
            "min_v6": args.min_v6,
            "min_connected": args.min_connected,
            "latest": args.latest,
            "page": args.page,
            "page_size": args.page_size,
        },
    )


def cmd_serve(args: argparse.Namespace) -> None:
    from app.uvicorn_runner import main as serve  # noqa: WPS433

    serve(host=args.host, port=args.port)


def _add_pagination(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--page", type=int)
    parser.add_argument("--page-size", dest="page_size", type=int)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="BGPKIT data API command-line interface")
    sub = parser.add_subparsers(dest="command")

    asninfo_p = sub.add_parser("asninfo")
    asninfo_p.add_argument("--asn", type=int)
    asninfo_p.add_argument("--asns", help="','-separated ASNs")
    asninfo_p.add_argument("--name")
    asninfo_p.add_argument("--country")
    _add_pagination(asninfo_p)
    asninfo_p.set_defaults(func=cmd_asninfo)

    roas_p = sub.add_parser("roas")
    roas_p.add_argument("--asn", type=int)
    roas_p.add_argument("--prefix")
    roas_p.add_argument("--tal")
    roas_p.add_argument("--date", help="YYYY-MM-DD")
    roas_p.add_argument("--current", type=_tristate)
    roas_p.add_argument("--max-len", dest="max_len", type=int)
    _add_pagination(roas_p)
    roas_p.set_defaults(func=cmd_roas)

    broker_p = sub.add_parser("broker")
    broker_p.add_argument("--ts-start", dest="ts_start")
    broker_p.add_argument("--ts-end", dest="ts_end")
    broker_p.add_argument("--duration", help="e.g. 2h30m")
    broker_p.add_argument("--duration-days", dest="duration_days", type=int)
    broker_p.add_argument("--duration-hours", dest="duration_hours", type=int)
    broker_p.add_argument("--duration-minutes", dest="duration_minutes", type=int)
    broker_p.add_argument("--project")
    broker_p.add_argument("--collectors", help="','-separated collector IDs")
    broker_p.add_argument("--data-type", dest="data_type")
    _add_pagination(broker_p)
    broker_p.set_defaults(func=cmd_broker)

    peers_p = sub.add_parser("peers")
    peers_p.add_argument("--ip")
    peers_p.add_argument("--asn", type=int)
    peers_p.add_argument("--date", help="YYYY-MM-DD, requires --latest false")
    peers_p.add_argument("--collector")
    peers_p.add_argument("--min-v4", dest="min_v4", type=int)
    peers_p.add_argument("--min-v6", dest="min_v6", type=int)
    peers_p.add_argument("--min-connected", dest="min_connected", type=int)
    peers_p.add_argument("--latest", type=_tristate)
    _add_pagination(peers_p)
    peers_p.set_defaults(func=cmd_peers)

    serve_p = sub.add_parser("serve")
    serve_p.add_argument("--host")
    serve_p.add_argument("--port", type=int)
    serve_p.set_defaults(func=cmd_serve)

    return parser


def main() -> None:
    """CLI entry point invoked via `bgpkit-api ...` or `python -m cli.bgpkit_cli ...`."""
    parser = build_parser()
    args = parser.parse_args()
    if not hasattr(args, "func"):
        parser.print_help()
        return
    args.func(args)


if __name__ == "__main__":
    main()
