"""
Exceptions for the Arseeding SDK.
"""
from typing import Optional


class ArseedingError(Exception):
    """
    Base exception for all Arseeding SDK errors.

    Attributes:
        order: Bundler order accepted before a payment failure, if any
    """
    order = None


class ArgumentError(ArseedingError):
    """Raised when a caller-supplied value is invalid."""
    pass


class UnknownTokenError(ArgumentError):
    """Raised when a currency symbol is not present in the token registry."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"unknown token symbol: {symbol}")


class SigningError(ArseedingError):
    """Raised when a local or interactive signing operation fails."""
    pass


class AddressError(ArseedingError):
    """Raised when a wallet address cannot be derived."""
    pass


class NetworkError(ArseedingError):
    """Raised on transport-level failures (connection, timeout, TLS)."""
    pass


class DecodeError(ArseedingError):
    """Raised when a response body does not match the expected schema."""
    pass


class APIError(ArseedingError):
    """
    Raised when a service answers with a non-success status.

    The message is the literal ``error`` field of the service's error
    envelope, or the raw response body when no envelope could be decoded.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
