"""
Payment orchestrator.

Composes the pure layer (builder.py, encoder.py) with the two external
boundaries (ledger.py, wallet.py):

    - ``connect_wallet()``: connect flow, selects the first address.
    - ``validate_payment_inputs()``: pure. Parses raw user input.
    - ``send_payment()``: params → build → encode → sign → broadcast.

State machine for one payment:

    IDLE → PARAMS_FETCHED → BUILT → ENCODED → SIGNED → BROADCAST
      └──────────┴────────────┴────────┴─────────┴──→ FAILED(error)

Fail-fast: the first error aborts the sequence and is raised to the
caller. Nothing is retried. Broadcast is the only side-effecting step
and happens only after a successful signature.

The orchestrator holds no per-flow state, so concurrent flows on one
instance are independent.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import StrEnum

from algopay.address import Address
from algopay.builder import PAYMENT_NOTE, build_payment_transaction
from algopay.encoder import encode_transaction
from algopay.errors import (
    EncodingFailure,
    InvalidAmount,
    InvalidFee,
    NetworkError,
    NoAddressesReturned,
    PaymentError,
    WalletError,
)
from algopay.ledger import LedgerClient
from algopay.txn import U64_MAX
from algopay.wallet import SignedTransaction, WalletBridge, parse_addresses

logger = logging.getLogger(__name__)

CONNECT_ERROR_PREFIX = "Error connecting wallet: "

_UINT_RE = re.compile(r"\+?[0-9]+")


# =========================================================================
# Inputs
# =========================================================================


@dataclass(frozen=True)
class PaymentInputs:
    """Raw, unvalidated user input."""

    receiver: str = ""
    amount: str = ""
    fee: str = ""


@dataclass(frozen=True)
class ValidatedPaymentInputs:
    receiver: Address
    amount: int
    fee: int


def _parse_u64(raw: str) -> int | None:
    if not isinstance(raw, str) or not _UINT_RE.fullmatch(raw):
        return None
    value = int(raw)
    return value if value <= U64_MAX else None


def validate_payment_inputs(
    raw_receiver: str,
    raw_amount: str,
    raw_fee: str,
) -> ValidatedPaymentInputs:
    """Parse raw receiver/amount/fee strings.

    Runs before any external call.

    Raises:
        InvalidAddress: If the receiver is not a valid address.
        InvalidAmount: If the amount is not an unsigned 64-bit integer.
        InvalidFee: If the fee is not an unsigned 64-bit integer.
    """
    receiver = Address.parse(raw_receiver)

    amount = _parse_u64(raw_amount)
    if amount is None:
        raise InvalidAmount(
            f"invalid amount: {raw_amount!r}",
            details={"amount": raw_amount},
        )
    fee = _parse_u64(raw_fee)
    if fee is None:
        raise InvalidFee(
            f"invalid fee: {raw_fee!r}",
            details={"fee": raw_fee},
        )
    return ValidatedPaymentInputs(receiver=receiver, amount=amount, fee=fee)


# =========================================================================
# Flow tracking
# =========================================================================


class PaymentState(StrEnum):
    IDLE = "IDLE"
    PARAMS_FETCHED = "PARAMS_FETCHED"
    BUILT = "BUILT"
    ENCODED = "ENCODED"
    SIGNED = "SIGNED"
    BROADCAST = "BROADCAST"
    FAILED = "FAILED"


@dataclass
class PaymentFlow:
    """Observable progress of a single send_payment() call.

    Attributes:
        state: Current state.
        history: Every state entered, in order, starting with IDLE.
        error: The originating step's error once FAILED.
        tx_id: Ledger-assigned id once BROADCAST.
    """

    state: PaymentState = PaymentState.IDLE
    history: list[PaymentState] = field(default_factory=lambda: [PaymentState.IDLE])
    error: PaymentError | None = None
    tx_id: str | None = None

    @property
    def done(self) -> bool:
        return self.state in (PaymentState.BROADCAST, PaymentState.FAILED)

    def advance(self, state: PaymentState) -> None:
        if self.done:
            raise RuntimeError(f"flow already finished in state {self.state}")
        self.state = state
        self.history.append(state)
        logger.info("Payment flow -> %s", state)

    def fail(self, error: PaymentError) -> None:
        self.error = error
        self.advance(PaymentState.FAILED)
        logger.warning("Payment flow failed: %s (%s)", error, error.error_code)


# =========================================================================
# Orchestrator
# =========================================================================


class PaymentOrchestrator:
    """Drives wallet connection and payment submission.

    Args:
        ledger: Ledger node boundary.
        wallet: Signing wallet boundary.
        note: Note bytes attached to built payments.
    """

    def __init__(
        self,
        ledger: LedgerClient,
        wallet: WalletBridge,
        *,
        note: bytes = PAYMENT_NOTE,
    ) -> None:
        self._ledger = ledger
        self._wallet = wallet
        self._note = note

    async def connect_accounts(self) -> tuple[Address, ...]:
        """Run the wallet connect flow and return every shared address."""
        logger.debug("Will connect wallet")
        try:
            raw = await self._wallet.connect()
        except PaymentError:
            raise
        except Exception as exc:
            raise WalletError(f"{CONNECT_ERROR_PREFIX}{exc}") from exc

        addresses = parse_addresses(raw)
        logger.debug("Finished connecting wallet, addresses: %s", [str(a) for a in addresses])
        return addresses

    async def connect_wallet(self) -> Address:
        """Connect and select the first shared address.

        Selecting the first address is a simplification; a UI offering
        several accounts should use connect_accounts() and let the user
        choose.

        Raises:
            NoAddressesReturned: If the wallet shared no address.
            WalletError: If the connect flow failed.
        """
        addresses = await self.connect_accounts()
        if not addresses:
            raise NoAddressesReturned(
                "Unexpected: wallet connect succeeded but returned no addresses"
            )
        return addresses[0]

    async def send_payment(
        self,
        sender: Address,
        inputs: ValidatedPaymentInputs,
        *,
        flow: PaymentFlow | None = None,
    ) -> str:
        """Build, sign and broadcast a payment.

        Args:
            sender: Connected sender address.
            inputs: Output of validate_payment_inputs().
            flow: Optional tracker, updated as the payment progresses.

        Returns:
            The ledger-assigned transaction id.

        Raises:
            NetworkError: Params fetch or broadcast failed.
            WalletError: Signing failed.
            UnsupportedVariant, EncodingFailure: Encoding failed.
        """
        flow = flow if flow is not None else PaymentFlow()
        try:
            return await self._run(sender, inputs, flow)
        except PaymentError as exc:
            flow.fail(exc)
            raise

    async def _run(
        self,
        sender: Address,
        inputs: ValidatedPaymentInputs,
        flow: PaymentFlow,
    ) -> str:
        # 1. Params
        try:
            params = await self._ledger.transaction_params()
        except PaymentError:
            raise
        except Exception as exc:
            raise NetworkError(f"Error fetching transaction params: {exc}") from exc
        flow.advance(PaymentState.PARAMS_FETCHED)

        # 2. Build
        try:
            txn = build_payment_transaction(
                sender,
                inputs.receiver,
                inputs.amount,
                inputs.fee,
                params,
                note=self._note,
            )
        except ValueError as exc:
            raise EncodingFailure(f"Error building transaction: {exc}") from exc
        flow.advance(PaymentState.BUILT)

        # 3. Encode
        wire_txn = encode_transaction(txn)
        flow.advance(PaymentState.ENCODED)

        # 4. Sign
        try:
            reply = await self._wallet.sign(wire_txn)
        except PaymentError:
            raise
        except Exception as exc:
            raise WalletError(f"Error signing transaction: {exc}") from exc
        signed = SignedTransaction.from_wire(reply)
        logger.debug("Signed transaction: txID=%s blob=%d bytes", signed.tx_id, len(signed.blob))
        flow.advance(PaymentState.SIGNED)

        # 5. Broadcast
        try:
            result = await self._ledger.broadcast_raw_transaction(signed.blob)
        except PaymentError:
            raise
        except Exception as exc:
            raise NetworkError(f"Error broadcasting transaction: {exc}") from exc
        flow.tx_id = result.tx_id
        flow.advance(PaymentState.BROADCAST)
        return result.tx_id
