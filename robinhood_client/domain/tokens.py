from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict


class _MfaChallenge(BaseModel):
    # Token endpoints add fields freely; only resource records are strict.
    model_config = ConfigDict(extra="ignore")

    mfa_code: str | None = None
    mfa_type: str | None = None
    mfa_required: bool | None = None

    @property
    def needs_mfa(self) -> bool:
        return bool(self.mfa_required)


class OAuthToken(_MfaChallenge):
    """Response of the OAuth2 password grant."""

    access_token: str | None = None
    expires_in: int | None = None
    token_type: str | None = None
    scope: str | None = None
    refresh_token: str | None = None
    backup_code: str | None = None

    # Stamped locally once the token is accepted.
    birth: datetime | None = None

    @property
    def credential(self) -> str | None:
        return self.access_token

    @property
    def expires_at(self) -> datetime | None:
        if self.birth is None or self.expires_in is None:
            return None
        return self.birth + timedelta(seconds=self.expires_in)

    def authorization_header(self) -> str:
        return f"Bearer {self.access_token}"


class PlainAuthToken(_MfaChallenge):
    """Response of the legacy token-auth endpoint."""

    token: str | None = None

    @property
    def credential(self) -> str | None:
        return self.token

    def authorization_header(self) -> str:
        return f"Token {self.token}"
