from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_API_BASE = "https://api.robinhood.com/"
DEFAULT_USER_AGENT = "Robinhood/2672 (Android 6.1;)"
DEFAULT_OAUTH_SCOPE = "internal"


@dataclass(frozen=True)
class Config:
    username: str | None = None
    password: str | None = None
    oauth_client_id: str | None = None
    oauth_scope: str = DEFAULT_OAUTH_SCOPE
    user_agent: str = DEFAULT_USER_AGENT
    api_base: str = DEFAULT_API_BASE
    timeout: float | None = None
    log_level: str = "INFO"


def _load_dotenv() -> None:
    """Best-effort .env loader without hard dependency."""
    try:
        from dotenv import load_dotenv
    except Exception:
        return

    load_dotenv()


def _optional_env(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


def load_config() -> Config:
    _load_dotenv()

    timeout = _optional_env("RH_TIMEOUT")

    return Config(
        username=_optional_env("RH_USERNAME"),
        password=_optional_env("RH_PASSWORD"),
        oauth_client_id=_optional_env("RH_OAUTH_CLIENT_ID"),
        oauth_scope=os.getenv("RH_OAUTH_SCOPE", DEFAULT_OAUTH_SCOPE),
        user_agent=os.getenv("RH_USER_AGENT", DEFAULT_USER_AGENT),
        api_base=os.getenv("RH_API_BASE", DEFAULT_API_BASE),
        timeout=float(timeout) if timeout else None,
        log_level=os.getenv("RH_LOG_LEVEL", "INFO").upper(),
    )
