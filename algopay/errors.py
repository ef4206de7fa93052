"""
Error taxonomy for payment preparation and submission.

Every failure surfaces to the immediate caller as a typed exception.
Nothing is retried or swallowed inside the library.

Categories:
    - UNSUPPORTED_VARIANT: the encoder has no wire mapping for the variant.
    - ENCODING_FAILURE: malformed address or hash data.
    - WALLET_ERROR: opaque failure passed through from the signing wallet.
    - NETWORK_ERROR: parameter fetch or broadcast failed.
    - INVALID_ADDRESS / INVALID_AMOUNT / INVALID_FEE: user input rejected
      before any external call is made.
    - NO_ADDRESSES_RETURNED: the wallet connected but offered no address.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Machine-readable error categories."""

    UNSUPPORTED_VARIANT = "UNSUPPORTED_VARIANT"
    ENCODING_FAILURE = "ENCODING_FAILURE"
    WALLET_ERROR = "WALLET_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_FEE = "INVALID_FEE"
    NO_ADDRESSES_RETURNED = "NO_ADDRESSES_RETURNED"


class NetworkFailureReason(StrEnum):
    """Finer-grained reason carried in NetworkError.details["reason"]."""

    TIMEOUT = "TIMEOUT"
    CONNECTION_FAILED = "CONNECTION_FAILED"
    HTTP_ERROR = "HTTP_ERROR"
    INVALID_JSON = "INVALID_JSON"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"


class PaymentError(Exception):
    """Base class for every failure raised by algopay.

    Args:
        message: Human-readable message, shown to the user verbatim.
        error_code: Category of the failure. Subclasses set a default.
        details: Structured diagnostics (URLs, field names, ...).
    """

    default_code: ErrorCode = ErrorCode.ENCODING_FAILURE

    def __init__(
        self,
        message: str,
        *,
        error_code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class UnsupportedVariant(PaymentError):
    default_code = ErrorCode.UNSUPPORTED_VARIANT


class EncodingFailure(PaymentError):
    default_code = ErrorCode.ENCODING_FAILURE


class WalletError(PaymentError):
    default_code = ErrorCode.WALLET_ERROR


class NetworkError(PaymentError):
    """Ledger node failure.

    ``details["reason"]`` holds a NetworkFailureReason when the failure
    came from the HTTP transport or from response parsing.
    """

    default_code = ErrorCode.NETWORK_ERROR

    @property
    def reason(self) -> NetworkFailureReason | None:
        reason = self.details.get("reason")
        return NetworkFailureReason(reason) if reason is not None else None


class ValidationError(PaymentError):
    """Raw user input could not be parsed."""


class InvalidAddress(ValidationError):
    default_code = ErrorCode.INVALID_ADDRESS


class InvalidAmount(ValidationError):
    default_code = ErrorCode.INVALID_AMOUNT


class InvalidFee(ValidationError):
    default_code = ErrorCode.INVALID_FEE


class NoAddressesReturned(PaymentError):
    default_code = ErrorCode.NO_ADDRESSES_RETURNED
