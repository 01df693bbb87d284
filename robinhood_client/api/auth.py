"""Login protocol.

Two mutually exclusive flows: the OAuth2 password grant (used when an OAuth
client id is configured) and the legacy token auth. Both may answer the first
attempt with an MFA challenge, in which case the code provider is asked for a
code and the same request is sent again with ``mfa_code`` attached.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, Optional, Type, Union

import requests

from ..domain import MfaCodeProvider, OAuthToken, PlainAuthToken
from ..errors import AuthenticationError, MfaRetryExceeded, TransportError
from .transport import decode, send

AuthToken = Union[OAuthToken, PlainAuthToken]

DEFAULT_MAX_MFA_ATTEMPTS = 1

logger = logging.getLogger(__name__)


class LoginFlow:
    path: ClassVar[str]
    token_model: ClassVar[Type[AuthToken]]

    def __init__(
        self,
        session: requests.Session,
        api_base: str,
        username: str,
        password: str,
        mfa_provider: MfaCodeProvider,
        *,
        timeout: Optional[float] = None,
        max_mfa_attempts: int = DEFAULT_MAX_MFA_ATTEMPTS,
    ) -> None:
        self._session = session
        self._url = api_base + self.path
        self._username = username
        self._password = password
        self._mfa_provider = mfa_provider
        self._timeout = timeout
        self._max_mfa_attempts = max_mfa_attempts

    def form(self, mfa_code: Optional[str] = None) -> Dict[str, str]:
        params = {"username": self._username, "password": self._password}
        if mfa_code is not None:
            params["mfa_code"] = mfa_code
        return params

    def authenticate(self) -> AuthToken:
        mfa_code: Optional[str] = None
        mfa_attempts = 0

        while True:
            token = self._request_token(mfa_code)
            if not token.needs_mfa:
                break

            if mfa_attempts >= self._max_mfa_attempts:
                logger.error("mfa_retry_exceeded", extra={"flow": self.name, "attempts": mfa_attempts})
                raise MfaRetryExceeded(f"{self.name} login still requires MFA after {mfa_attempts} attempt(s)")

            mfa_type = token.mfa_type or ""
            logger.info("mfa_required", extra={"flow": self.name, "mfa_type": mfa_type})
            mfa_code = self._mfa_provider.get_code(mfa_type)
            mfa_attempts += 1

        if not token.credential:
            raise AuthenticationError(f"{self.name} login returned no token")

        self.accept(token)
        logger.info("login_succeeded", extra={"flow": self.name, "mfa_attempts": mfa_attempts})
        return token

    def accept(self, token: AuthToken) -> None:
        pass

    @property
    def name(self) -> str:
        return type(self).__name__

    def _request_token(self, mfa_code: Optional[str]) -> AuthToken:
        try:
            resp = send(self._session, "POST", self._url, data=self.form(mfa_code), timeout=self._timeout)
        except TransportError as exc:
            # 400 is how the token endpoints reject bad credentials.
            if exc.status_code == 400:
                raise AuthenticationError(
                    f"{self.name} login rejected",
                    status_code=exc.status_code,
                    raw_response=exc.raw_response,
                ) from exc
            raise
        return decode(resp, self.token_model)


class OAuthLogin(LoginFlow):
    path = "oauth2/token/"
    token_model = OAuthToken

    def __init__(self, *args: Any, client_id: str, scope: str, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._client_id = client_id
        self._scope = scope

    def form(self, mfa_code: Optional[str] = None) -> Dict[str, str]:
        params = {
            "grant_type": "password",
            "username": self._username,
            "password": self._password,
            "scope": self._scope,
            "client_id": self._client_id,
        }
        if mfa_code is not None:
            params["mfa_code"] = mfa_code
        return params

    def accept(self, token: AuthToken) -> None:
        token.birth = datetime.now(timezone.utc)


class LegacyLogin(LoginFlow):
    path = "api-token-auth/"
    token_model = PlainAuthToken
