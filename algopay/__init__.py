"""
algopay: prepare ledger transactions for an external signing wallet.

Public API:

    Pure layer (no I/O):
        - ``encode_transaction()``: Transaction → wallet wire object.
        - ``merge()``: wire value merge, None deletes a key.
        - ``build_payment_transaction()``: unsigned Payment from params.
        - ``validate_payment_inputs()``: parse raw receiver/amount/fee.
        - Transaction model: ``Transaction`` and the variant payloads.

    Impure layer (network / wallet I/O):
        - ``PaymentOrchestrator``: connect, then params → build →
          encode → sign → broadcast.
        - ``PaymentSession``: user-facing outcome messages.

    Protocols (for dependency injection):
        - ``LedgerClient``: ledger node boundary (params, broadcast).
        - ``WalletBridge``: signing wallet boundary (connect, sign).
        - ``HttpTransport``: HTTP seam under AlgodClient.

    Concrete client:
        - ``AlgodClient``: algod v2 REST implementation of LedgerClient.
        - ``AlgodConfig``: node settings from the environment.
"""

from algopay.address import Address
from algopay.algod_client import AlgodClient
from algopay.builder import PAYMENT_NOTE, VALIDITY_WINDOW, build_payment_transaction
from algopay.config import AlgodConfig
from algopay.encoder import encode_transaction, txn_type
from algopay.errors import (
    EncodingFailure,
    ErrorCode,
    InvalidAddress,
    InvalidAmount,
    InvalidFee,
    NetworkError,
    NetworkFailureReason,
    NoAddressesReturned,
    PaymentError,
    UnsupportedVariant,
    ValidationError,
    WalletError,
)
from algopay.ledger import BroadcastResult, LedgerClient, TransactionParams
from algopay.provider import (
    PaymentFlow,
    PaymentInputs,
    PaymentOrchestrator,
    PaymentState,
    ValidatedPaymentInputs,
    validate_payment_inputs,
)
from algopay.session import PaymentSession
from algopay.transport import HttpTransport, HttpxTransport
from algopay.txn import (
    ApplicationCall,
    AssetAccept,
    AssetClawback,
    AssetConfiguration,
    AssetFreeze,
    AssetParams,
    AssetTransfer,
    KeyRegistration,
    OnComplete,
    Payment,
    Transaction,
    TxnPayload,
    TxnType,
)
from algopay.wallet import SignedTransaction, WalletBridge, parse_addresses
from algopay.wire import WireValue, dumps_wire, merge

__all__ = [
    "Address",
    "AlgodClient",
    "AlgodConfig",
    "ApplicationCall",
    "AssetAccept",
    "AssetClawback",
    "AssetConfiguration",
    "AssetFreeze",
    "AssetParams",
    "AssetTransfer",
    "BroadcastResult",
    "EncodingFailure",
    "ErrorCode",
    "HttpTransport",
    "HttpxTransport",
    "InvalidAddress",
    "InvalidAmount",
    "InvalidFee",
    "KeyRegistration",
    "LedgerClient",
    "NetworkError",
    "NetworkFailureReason",
    "NoAddressesReturned",
    "OnComplete",
    "PAYMENT_NOTE",
    "Payment",
    "PaymentError",
    "PaymentFlow",
    "PaymentInputs",
    "PaymentOrchestrator",
    "PaymentSession",
    "PaymentState",
    "SignedTransaction",
    "Transaction",
    "TransactionParams",
    "TxnPayload",
    "TxnType",
    "UnsupportedVariant",
    "VALIDITY_WINDOW",
    "ValidatedPaymentInputs",
    "ValidationError",
    "WalletBridge",
    "WalletError",
    "WireValue",
    "build_payment_transaction",
    "dumps_wire",
    "encode_transaction",
    "merge",
    "parse_addresses",
    "txn_type",
    "validate_payment_inputs",
]
