"""Exception hierarchy for API calls.

Every ``requests`` failure, HTTP error status and schema mismatch is mapped
to one of these before it leaves the package.
"""

from __future__ import annotations


class RobinhoodError(Exception):
    """Base exception for all client operations."""

    def __init__(self, message: str, status_code: int | None = None, raw_response: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.raw_response = raw_response


class TransportError(RobinhoodError):
    """Connection failure, timeout, or an HTTP error status."""


class DecodeError(RobinhoodError):
    """Response body is not JSON or does not match the expected schema."""


class AuthenticationError(RobinhoodError):
    """Rejected credentials, or login finished without a usable token."""


class MfaRetryExceeded(AuthenticationError):
    """Server kept asking for an MFA code after the allowed retries."""


class InstrumentNotFound(RobinhoodError, LookupError):
    pass


class AccountNotFound(RobinhoodError, LookupError):
    pass
