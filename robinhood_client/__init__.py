"""Client for the Robinhood private REST API."""

from .api import Client, ClientBuilder, OrderBuilder
from .config import Config, load_config
from .domain import Account, Instrument, MfaCodeProvider, Order, Position
from .errors import (
    AccountNotFound,
    AuthenticationError,
    DecodeError,
    InstrumentNotFound,
    MfaRetryExceeded,
    RobinhoodError,
    TransportError,
)

__all__ = [
    "Account",
    "AccountNotFound",
    "AuthenticationError",
    "Client",
    "ClientBuilder",
    "Config",
    "DecodeError",
    "Instrument",
    "InstrumentNotFound",
    "MfaCodeProvider",
    "MfaRetryExceeded",
    "Order",
    "OrderBuilder",
    "Position",
    "RobinhoodError",
    "TransportError",
    "load_config",
]
