from __future__ import annotations

import argparse
import json
import sys
from itertools import islice
from typing import Any, Callable, Dict, Iterable

from pydantic import BaseModel

from .api import Client, ClientBuilder
from .config import Config, load_config
from .errors import RobinhoodError
from .logging import configure_logging


def _print_json(payload: Dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(payload, default=str) + "\n")


def _dump(record: BaseModel) -> Dict[str, Any]:
    return record.model_dump(mode="json", by_alias=True)


def _build_client(config: Config) -> Client:
    return ClientBuilder.from_config(config).build()


def _print_records(records: Iterable[BaseModel], limit: int | None) -> int:
    count = 0
    for record in islice(records, limit):
        _print_json(_dump(record))
        count += 1
    return count


def cmd_instruments(client: Client, args: argparse.Namespace) -> int:
    _print_records(client.instruments(), args.limit)
    return 0


def cmd_instrument(client: Client, args: argparse.Namespace) -> int:
    _print_json(_dump(client.instrument_by_symbol(args.symbol)))
    return 0


def cmd_accounts(client: Client, args: argparse.Namespace) -> int:
    _print_records(client.accounts(), args.limit)
    return 0


def cmd_orders(client: Client, args: argparse.Namespace) -> int:
    _print_records(client.orders(), args.limit)
    return 0


def cmd_positions(client: Client, args: argparse.Namespace) -> int:
    positions = client.positions_nonzero() if args.nonzero else client.positions()
    _print_records(positions, args.limit)
    return 0


def cmd_place(client: Client, args: argparse.Namespace) -> int:
    instrument = client.instrument_by_symbol(args.symbol)
    if args.side == "buy":
        builder = client.buy(args.quantity, instrument)
    else:
        builder = client.sell(args.quantity, instrument)

    if args.limit is not None:
        builder.limit(args.limit)
    if args.stop is not None:
        builder.stop(args.stop)
    if args.price is not None:
        builder.price(args.price)
    if args.extended_hours:
        builder.extended_hours()
    getattr(builder, args.tif)()

    if args.dry_run:
        _print_json({"submitted": False, "dry_run": True, "form": builder.form()})
        return 0

    order = builder.send()
    _print_json({"submitted": True, "order": _dump(order)})
    return 0


def cmd_cancel(client: Client, args: argparse.Namespace) -> int:
    order = client.order(args.order_id)
    cancelled = client.cancel(order)
    _print_json({"order_id": order.id, "cancelled": cancelled, "state": order.state})
    return 0 if cancelled else 1


def cmd_logout(client: Client, args: argparse.Namespace) -> int:
    ok = client.logout()
    _print_json({"logged_out": ok})
    return 0 if ok else 1


def _run(command: Callable[[Client, argparse.Namespace], int], args: argparse.Namespace) -> int:
    config = load_config()
    configure_logging(config.log_level)

    try:
        client = _build_client(config)
        return command(client, args)
    except RobinhoodError as exc:
        _print_json({"error": type(exc).__name__, "message": str(exc), "status_code": exc.status_code})
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rh-cli")
    sub = parser.add_subparsers(dest="command", required=True)

    instruments = sub.add_parser("instruments", help="List instruments")
    instruments.add_argument("--limit", type=int, default=10, help="Maximum records to print")
    instruments.set_defaults(func=cmd_instruments)

    instrument = sub.add_parser("instrument", help="Look up one instrument by symbol")
    instrument.add_argument("--symbol", required=True, help="Ticker symbol, e.g. MSFT")
    instrument.set_defaults(func=cmd_instrument)

    accounts = sub.add_parser("accounts", help="List accounts (login required)")
    accounts.add_argument("--limit", type=int, default=None, help="Maximum records to print")
    accounts.set_defaults(func=cmd_accounts)

    orders = sub.add_parser("orders", help="List order history (login required)")
    orders.add_argument("--limit", type=int, default=100, help="Maximum records to print")
    orders.set_defaults(func=cmd_orders)

    positions = sub.add_parser("positions", help="List positions of the first account")
    positions.add_argument("--nonzero", action="store_true", help="Only positions with a nonzero quantity")
    positions.add_argument("--limit", type=int, default=None, help="Maximum records to print")
    positions.set_defaults(func=cmd_positions)

    place = sub.add_parser("place", help="Submit an order on the first account")
    place.add_argument("--side", choices=["buy", "sell"], required=True)
    place.add_argument("--symbol", required=True)
    place.add_argument("--quantity", type=int, required=True)
    place.add_argument("--limit", type=float, default=None, help="Limit price; makes this a limit order")
    place.add_argument("--stop", type=float, default=None, help="Stop price; sets trigger=stop")
    place.add_argument("--price", type=float, default=None, help="Collar price for a market order")
    place.add_argument("--tif", choices=["gfd", "gtc", "opg"], default="gfd", help="Time in force")
    place.add_argument("--extended-hours", action="store_true")
    place.add_argument("--dry-run", action="store_true", help="Print the order form but do not submit")
    place.set_defaults(func=cmd_place)

    cancel = sub.add_parser("cancel", help="Cancel an open order")
    cancel.add_argument("--order-id", required=True)
    cancel.set_defaults(func=cmd_cancel)

    logout = sub.add_parser("logout", help="Expire the login token")
    logout.set_defaults(func=cmd_logout)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run(args.func, args)


if __name__ == "__main__":
    raise SystemExit(main())
