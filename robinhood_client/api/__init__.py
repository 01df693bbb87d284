"""HTTP adapter package."""

from .auth import LegacyLogin, LoginFlow, OAuthLogin
from .builders import OrderBuilder
from .client import Client, ClientBuilder
from .pagination import Accounts, Instruments, Orders, Positions, ResourceIterator

__all__ = [
    "Accounts",
    "Client",
    "ClientBuilder",
    "Instruments",
    "LegacyLogin",
    "LoginFlow",
    "OAuthLogin",
    "OrderBuilder",
    "Orders",
    "Positions",
    "ResourceIterator",
]
