from __future__ import annotations

import logging
from typing import Optional

import requests

from ..config import DEFAULT_API_BASE, DEFAULT_OAUTH_SCOPE, DEFAULT_USER_AGENT, Config
from ..domain import (
    Account,
    Instrument,
    MfaCallback,
    MfaCodeProvider,
    Order,
    PromptMfaCodeProvider,
    as_mfa_provider,
)
from ..errors import AccountNotFound
from .auth import DEFAULT_MAX_MFA_ATTEMPTS, LegacyLogin, LoginFlow, OAuthLogin
from .builders import OrderBuilder, Side
from .pagination import Accounts, Instruments, Orders, Positions
from .transport import decode, send

LOGOUT_PATH = "api-token-logout/"

logger = logging.getLogger(__name__)


def _normalize_base(api_base: str) -> str:
    return api_base if api_base.endswith("/") else api_base + "/"


class Client:
    """Session against the API.

    Holds a ``requests.Session`` with the user agent and, after login, the
    ``Authorization`` header installed. Iterators and order builders share
    that session; the client itself keeps no other state.
    """

    def __init__(
        self,
        session: requests.Session,
        *,
        authorized: bool = False,
        api_base: str = DEFAULT_API_BASE,
        timeout: Optional[float] = None,
    ) -> None:
        self.session = session
        self._authorized = authorized
        self.api_base = _normalize_base(api_base)
        self.timeout = timeout

    @classmethod
    def builder(cls) -> "ClientBuilder":
        return ClientBuilder()

    @property
    def authorized(self) -> bool:
        return self._authorized

    def logout(self) -> bool:
        """Expire the token server-side.

        Legacy token auth hands every login for a user the same token, so this
        logs out every client sharing it. OAuth sessions are unaffected.
        """
        if not self._authorized:
            return False

        resp = send(self.session, "POST", self.api_base + LOGOUT_PATH, timeout=self.timeout, raise_for_status=False)
        logger.info("logout", extra={"status_code": resp.status_code})
        return resp.ok

    # --- listings ---
    def instruments(self) -> Instruments:
        return Instruments(self.session, self.api_base, timeout=self.timeout)

    def instrument_by_symbol(self, symbol: str) -> Instrument:
        return Instruments.search_by_symbol(self.session, self.api_base, symbol, timeout=self.timeout)

    def accounts(self) -> Accounts:
        return Accounts(self.session, self.api_base, timeout=self.timeout)

    def orders(self) -> Orders:
        return Orders(self.session, self.api_base, timeout=self.timeout)

    def order(self, order_id: str) -> Order:
        resp = send(self.session, "GET", f"{self.api_base}{Orders.path}{order_id}/", timeout=self.timeout)
        return decode(resp, Order)

    def positions(self) -> Positions:
        return self.positions_with_account(self.first_account())

    def positions_with_account(self, account: Account) -> Positions:
        return Positions(self.session, self.api_base, account.positions, timeout=self.timeout)

    def positions_nonzero(self) -> Positions:
        url = f"{self.api_base}{Positions.path}?nonzero=true"
        return Positions(self.session, self.api_base, url, timeout=self.timeout)

    def positions_nonzero_with_account(self, account: Account) -> Positions:
        return Positions(self.session, self.api_base, f"{account.positions}?nonzero=true", timeout=self.timeout)

    def first_account(self) -> Account:
        account = next(self.accounts(), None)
        if account is None:
            raise AccountNotFound("No brokerage account is available for this login")
        return account

    # --- orders ---
    def buy(self, quantity: int, instrument: Instrument) -> OrderBuilder:
        return self.buy_with_account(quantity, instrument, self.first_account())

    def buy_with_account(self, quantity: int, instrument: Instrument, account: Account) -> OrderBuilder:
        return self._order_builder("buy", quantity, instrument, account)

    def sell(self, quantity: int, instrument: Instrument) -> OrderBuilder:
        return self.sell_with_account(quantity, instrument, self.first_account())

    def sell_with_account(self, quantity: int, instrument: Instrument, account: Account) -> OrderBuilder:
        return self._order_builder("sell", quantity, instrument, account)

    def cancel(self, order: Order) -> bool:
        if order.cancel_url is None:
            logger.info("cancel_unavailable", extra={"order_id": order.id, "state": order.state})
            return False

        resp = send(self.session, "POST", order.cancel_url, timeout=self.timeout, raise_for_status=False)
        logger.info("cancel_requested", extra={"order_id": order.id, "status_code": resp.status_code})
        return resp.ok

    def _order_builder(self, side: Side, quantity: int, instrument: Instrument, account: Account) -> OrderBuilder:
        return OrderBuilder(self.session, self.api_base, side, quantity, instrument, account, timeout=self.timeout)


class ClientBuilder:
    def __init__(self) -> None:
        self._username: Optional[str] = None
        self._password: Optional[str] = None
        self._agent = DEFAULT_USER_AGENT
        self._client_id: Optional[str] = None
        self._scope = DEFAULT_OAUTH_SCOPE
        self._mfa_provider: MfaCodeProvider = PromptMfaCodeProvider()
        self._max_mfa_attempts = DEFAULT_MAX_MFA_ATTEMPTS
        self._api_base = DEFAULT_API_BASE
        self._timeout: Optional[float] = None
        self._session: Optional[requests.Session] = None

    @classmethod
    def from_config(cls, config: Config) -> "ClientBuilder":
        builder = (
            cls()
            .user_agent(config.user_agent)
            .oauth_scope(config.oauth_scope)
            .api_base(config.api_base)
            .timeout(config.timeout)
        )
        if config.oauth_client_id:
            builder.oauth_client(config.oauth_client_id)
        if config.username and config.password:
            builder.login(config.username, config.password)
        return builder

    def user_agent(self, agent: str) -> "ClientBuilder":
        self._agent = agent
        return self

    def oauth_client(self, client_id: str) -> "ClientBuilder":
        self._client_id = client_id
        return self

    def oauth_scope(self, scope: str) -> "ClientBuilder":
        self._scope = scope
        return self

    def mfa(self, provider: MfaCodeProvider | MfaCallback, max_attempts: int = DEFAULT_MAX_MFA_ATTEMPTS) -> "ClientBuilder":
        self._mfa_provider = as_mfa_provider(provider)
        self._max_mfa_attempts = max_attempts
        return self

    def login(self, username: str, password: str) -> "ClientBuilder":
        self._username = username
        self._password = password
        return self

    def api_base(self, api_base: str) -> "ClientBuilder":
        self._api_base = _normalize_base(api_base)
        return self

    def timeout(self, timeout: Optional[float]) -> "ClientBuilder":
        self._timeout = timeout
        return self

    def session(self, session: requests.Session) -> "ClientBuilder":
        self._session = session
        return self

    def build(self) -> Client:
        session = self._session or requests.Session()
        session.headers.update({"User-Agent": self._agent, "Accept": "application/json"})

        authorized = False
        username, password = self._username, self._password
        if username and password:
            token = self._login_flow(session, username, password).authenticate()
            session.headers["Authorization"] = token.authorization_header()
            authorized = True
        else:
            logger.info("client_built_without_login")

        return Client(session, authorized=authorized, api_base=self._api_base, timeout=self._timeout)

    def _login_flow(self, session: requests.Session, username: str, password: str) -> LoginFlow:
        common = dict(timeout=self._timeout, max_mfa_attempts=self._max_mfa_attempts)
        if self._client_id:
            return OAuthLogin(
                session,
                self._api_base,
                username,
                password,
                self._mfa_provider,
                client_id=self._client_id,
                scope=self._scope,
                **common,
            )
        return LegacyLogin(session, self._api_base, username, password, self._mfa_provider, **common)
