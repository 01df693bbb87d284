from __future__ import annotations

import logging
from typing import Dict, Literal, Optional

import requests

from ..domain import Account, Instrument, Order
from .transport import decode, send

Side = Literal["buy", "sell"]
OrderType = Literal["market", "limit"]
TimeInForce = Literal["gfd", "gtc", "opg"]

ORDERS_PATH = "orders/"

logger = logging.getLogger(__name__)


def format_price(price: float) -> str:
    # Sub-dollar equities tick in 1/100 cent.
    if price < 1:
        return f"{price:.4f}"
    return f"{price:.2f}"


class OrderBuilder:
    """Collects the parameters of one single-leg order and submits it.

    Market orders are sent without a price unless ``price()`` sets a collar;
    no quote lookup is made.
    """

    def __init__(
        self,
        session: requests.Session,
        api_base: str,
        side: Side,
        quantity: int,
        instrument: Instrument,
        account: Account,
        *,
        timeout: Optional[float] = None,
    ) -> None:
        if side not in ("buy", "sell"):
            raise ValueError(f"side must be 'buy' or 'sell', got {side!r}")
        if quantity <= 0:
            raise ValueError("quantity must be positive")

        self._session = session
        self._url = api_base + ORDERS_PATH
        self._timeout = timeout
        self._sent = False

        self.side: Side = side
        self.quantity = quantity
        self.instrument = instrument
        self.account = account

        self.order_type: OrderType = "market"
        self.time_in_force: TimeInForce = "gfd"
        self.price_value: Optional[float] = None
        self.stop_price: Optional[float] = None
        self.extended_hours_enabled = False
        self.override_dtbp = False

    def gfd(self) -> "OrderBuilder":
        self.time_in_force = "gfd"
        return self

    def gtc(self) -> "OrderBuilder":
        self.time_in_force = "gtc"
        return self

    def opg(self) -> "OrderBuilder":
        self.time_in_force = "opg"
        return self

    def limit(self, price: float) -> "OrderBuilder":
        self.price_value = price
        self.order_type = "limit"
        return self

    def stop(self, price: float) -> "OrderBuilder":
        self.stop_price = price
        return self

    def price(self, price: float) -> "OrderBuilder":
        """Collar price; keeps the order type."""
        self.price_value = price
        return self

    def extended_hours(self, enabled: bool = True) -> "OrderBuilder":
        self.extended_hours_enabled = enabled
        return self

    def override_dtbp_checks(self, enabled: bool = True) -> "OrderBuilder":
        self.override_dtbp = enabled
        return self

    def form(self) -> Dict[str, str]:
        params = {
            "account": self.account.url,
            "instrument": self.instrument.url,
            "symbol": self.instrument.symbol,
            "type": self.order_type,
            "time_in_force": self.time_in_force,
            "trigger": "immediate",
            "quantity": str(self.quantity),
            "side": self.side,
        }

        if self.stop_price is not None:
            params["stop_price"] = format_price(self.stop_price)
            params["trigger"] = "stop"

        if self.price_value is not None:
            params["price"] = format_price(self.price_value)

        # The API rejects orders flagged as day trades unless this is set.
        params["override_day_trade_checks"] = "true"

        if self.override_dtbp:
            params["override_dtbp_checks"] = "true"
        if self.extended_hours_enabled:
            params["extended_hours"] = "true"

        return params

    def send(self) -> Order:
        if self._sent:
            raise RuntimeError("order builder has already been sent")
        self._sent = True

        params = self.form()
        resp = send(self._session, "POST", self._url, data=params, timeout=self._timeout)
        order = decode(resp, Order)

        logger.info(
            "order_submitted",
            extra={
                "order_id": order.id,
                "symbol": params["symbol"],
                "side": self.side,
                "order_type": self.order_type,
                "quantity": self.quantity,
                "state": order.state,
            },
        )
        return order
