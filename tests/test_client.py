from __future__ import annotations

import unittest

from robinhood_client.api import Client
from robinhood_client.domain import Account, Instrument, Order
from robinhood_client.errors import AccountNotFound

from .fakes import API, FakeSession, account_payload, instrument_payload, order_payload, page, position_payload

ACCOUNTS = f"{API}accounts/"
ACCOUNT_POSITIONS = f"{API}accounts/5RY82436/positions/"


def _client(session: FakeSession, authorized: bool = True) -> Client:
    return Client(session, authorized=authorized, api_base=API)


def client_instrument() -> Instrument:
    return Instrument.model_validate(instrument_payload("MSFT"))


class ClientListingTestCase(unittest.TestCase):
    def test_positions_use_first_account(self) -> None:
        session = FakeSession()
        session.add("GET", ACCOUNTS, page([account_payload(), account_payload("9XX00000")]))
        session.add("GET", ACCOUNT_POSITIONS, page([position_payload()]))

        positions = list(_client(session).positions())

        self.assertEqual(len(positions), 1)
        self.assertEqual([call.url for call in session.calls], [ACCOUNTS, ACCOUNT_POSITIONS])

    def test_positions_with_account(self) -> None:
        session = FakeSession()
        session.add("GET", f"{API}accounts/9XX00000/positions/", page([]))
        account = Account.model_validate(account_payload("9XX00000"))

        self.assertEqual(list(_client(session).positions_with_account(account)), [])

    def test_nonzero_positions(self) -> None:
        session = FakeSession()
        account = Account.model_validate(account_payload())

        client = _client(session)

        self.assertEqual(client.positions_nonzero().next_url, f"{API}positions/?nonzero=true")
        self.assertEqual(
            client.positions_nonzero_with_account(account).next_url,
            f"{ACCOUNT_POSITIONS}?nonzero=true",
        )
        self.assertEqual(session.calls, [])

    def test_positions_without_accounts(self) -> None:
        session = FakeSession()
        session.add("GET", ACCOUNTS, page([]))

        with self.assertRaises(AccountNotFound):
            _client(session).positions()

    def test_instrument_by_symbol(self) -> None:
        session = FakeSession()
        session.add("GET", f"{API}instruments/?symbol=MSFT", page([instrument_payload("MSFT")]))

        instrument = _client(session, authorized=False).instrument_by_symbol("MSFT")

        self.assertEqual(instrument.symbol, "MSFT")
        self.assertEqual(instrument.type_field, "stock")

    def test_order_by_id(self) -> None:
        session = FakeSession()
        session.add("GET", f"{API}orders/abc/", order_payload("abc"))

        order = _client(session).order("abc")

        self.assertEqual(order.id, "abc")

    def test_timeout_is_passed_to_transport(self) -> None:
        session = FakeSession()
        session.add("GET", ACCOUNTS, page([]))
        client = Client(session, authorized=True, api_base=API, timeout=7.5)

        list(client.accounts())

        self.assertEqual(session.calls[0].timeout, 7.5)


class ClientOrderTestCase(unittest.TestCase):
    def test_buy_defaults_to_first_account(self) -> None:
        session = FakeSession()
        session.add("GET", ACCOUNTS, page([account_payload()]))
        session.add("POST", f"{API}orders/", order_payload())
        client = _client(session)
        instrument = client_instrument()

        order = client.buy(10, instrument).send()

        self.assertEqual(order.state, "queued")
        form = session.calls[1].data
        self.assertEqual(form["account"], f"{API}accounts/5RY82436/")
        self.assertEqual(form["side"], "buy")
        self.assertEqual(form["type"], "market")
        self.assertNotIn("price", form)

    def test_sell_with_account_skips_account_lookup(self) -> None:
        session = FakeSession()
        account = Account.model_validate(account_payload("9XX00000"))

        builder = _client(session).sell_with_account(3, client_instrument(), account)

        self.assertEqual(builder.form()["side"], "sell")
        self.assertEqual(builder.form()["account"], f"{API}accounts/9XX00000/")
        self.assertEqual(session.calls, [])


class ClientCancelLogoutTestCase(unittest.TestCase):
    def test_cancel_without_cancel_url_makes_no_request(self) -> None:
        session = FakeSession()
        order = Order.model_validate(order_payload(cancel=None, state="filled"))

        self.assertFalse(_client(session).cancel(order))
        self.assertEqual(session.calls, [])

    def test_cancel_posts_to_cancel_url(self) -> None:
        session = FakeSession()
        order = Order.model_validate(order_payload("abc"))
        session.add("POST", f"{API}orders/abc/cancel/", {})

        self.assertTrue(_client(session).cancel(order))
        self.assertEqual(session.calls[0].method, "POST")

    def test_cancel_rejected_by_server(self) -> None:
        session = FakeSession()
        order = Order.model_validate(order_payload("abc"))
        session.add("POST", f"{API}orders/abc/cancel/", {"detail": "Order has already been filled."}, status=400)

        self.assertFalse(_client(session).cancel(order))

    def test_logout_when_authorized(self) -> None:
        session = FakeSession()
        session.add("POST", f"{API}api-token-logout/")

        self.assertTrue(_client(session).logout())
        self.assertEqual(len(session.calls), 1)

    def test_logout_when_not_authorized(self) -> None:
        session = FakeSession()

        self.assertFalse(_client(session, authorized=False).logout())
        self.assertEqual(session.calls, [])


if __name__ == "__main__":
    unittest.main()
