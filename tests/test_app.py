from __future__ import annotations

import io
import json
import logging
import unittest
from unittest.mock import patch

from robinhood_client.api import Client
from robinhood_client.app import build_parser, main
from robinhood_client.config import Config

from .fakes import API, FakeSession, account_payload, instrument_payload, order_payload, page


def _run(session: FakeSession, argv: list[str]) -> tuple[int, list[dict]]:
    client = Client(session, authorized=True, api_base=API)
    out = io.StringIO()
    with patch("robinhood_client.app.load_config", return_value=Config()), patch(
        "robinhood_client.app._build_client", return_value=client
    ), patch("sys.stdout", out):
        code = main(argv)
    lines = [json.loads(line) for line in out.getvalue().splitlines()]
    return code, lines


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.saved_handlers = list(logging.getLogger("robinhood_client").handlers)

    def tearDown(self) -> None:
        logging.getLogger("robinhood_client").handlers[:] = self.saved_handlers

    def test_parser_requires_command(self) -> None:
        with self.assertRaises(SystemExit):
            build_parser().parse_args([])

    def test_instruments_respects_limit(self) -> None:
        session = FakeSession()
        session.add(
            "GET",
            f"{API}instruments/",
            page([instrument_payload("AAPL"), instrument_payload("MSFT")], f"{API}instruments/?cursor=2"),
        )

        code, lines = _run(session, ["instruments", "--limit", "2"])

        self.assertEqual(code, 0)
        self.assertEqual([line["symbol"] for line in lines], ["AAPL", "MSFT"])
        self.assertEqual(len(session.calls), 1)

    def test_place_dry_run_does_not_submit(self) -> None:
        session = FakeSession()
        session.add("GET", f"{API}instruments/?symbol=MSFT", page([instrument_payload("MSFT")]))
        session.add("GET", f"{API}accounts/", page([account_payload()]))

        code, lines = _run(
            session,
            ["place", "--side", "buy", "--symbol", "MSFT", "--quantity", "10", "--limit", "25.5", "--tif", "gtc", "--dry-run"],
        )

        self.assertEqual(code, 0)
        self.assertTrue(lines[0]["dry_run"])
        form = lines[0]["form"]
        self.assertEqual(form["type"], "limit")
        self.assertEqual(form["price"], "25.50")
        self.assertEqual(form["time_in_force"], "gtc")
        self.assertEqual(session.calls_to(f"{API}orders/"), [])

    def test_cancel_filled_order_reports_failure(self) -> None:
        session = FakeSession()
        session.add("GET", f"{API}orders/abc/", order_payload("abc", cancel=None, state="filled"))

        code, lines = _run(session, ["cancel", "--order-id", "abc"])

        self.assertEqual(code, 1)
        self.assertEqual(lines[0], {"order_id": "abc", "cancelled": False, "state": "filled"})

    def test_errors_are_printed_as_json(self) -> None:
        session = FakeSession()
        session.add("GET", f"{API}instruments/?symbol=NOPE", page([]))

        code, lines = _run(session, ["instrument", "--symbol", "NOPE"])

        self.assertEqual(code, 1)
        self.assertEqual(lines[0]["error"], "InstrumentNotFound")


if __name__ == "__main__":
    unittest.main()
