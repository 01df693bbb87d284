from .mfa import CallbackMfaCodeProvider, MfaCallback, MfaCodeProvider, PromptMfaCodeProvider, as_mfa_provider
from .resources import (
    Account,
    Execution,
    InstantEligibility,
    Instrument,
    MarginBalances,
    Order,
    PaginatedPage,
    Position,
    Record,
)
from .tokens import OAuthToken, PlainAuthToken

__all__ = [
    "Account",
    "CallbackMfaCodeProvider",
    "Execution",
    "InstantEligibility",
    "Instrument",
    "MarginBalances",
    "MfaCallback",
    "MfaCodeProvider",
    "OAuthToken",
    "Order",
    "PaginatedPage",
    "PlainAuthToken",
    "Position",
    "PromptMfaCodeProvider",
    "Record",
    "as_mfa_provider",
]
