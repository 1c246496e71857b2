"""
Exception types raised by the TRON wallet modules.
"""
from typing import Optional


class TronWalletError(Exception):
    """Base class for every error raised by tron_wallet / tron_utils."""


class ConfigurationError(TronWalletError):
    """A required setting (e.g. the TronGrid API key) is missing or invalid."""


class RemoteAPIError(TronWalletError):
    """TronGrid reported a failure or returned a payload we cannot read."""

    def __init__(self, message: str, payload: Optional[object] = None):
        super().__init__(message)
        self.message = message
        self.payload = payload


class TransportError(TronWalletError):
    """The HTTP request itself failed (connection, timeout, error status)."""


class InsufficientBalanceError(TronWalletError):
    """The requested amount is not strictly below the available balance."""

    def __init__(self, message: str, balance: int = 0, amount: int = 0):
        super().__init__(message)
        self.balance = balance
        self.amount = amount
