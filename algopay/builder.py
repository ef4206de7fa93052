"""
Transaction builder.

Builds an unsigned Payment from user input and the node's parameters.
Pure: no network calls. The orchestrator fetches the parameters first.

Rules:
    - first_valid = params.last_round
    - last_valid = params.last_round + VALIDITY_WINDOW
    - genesis id and hash copied verbatim from params
    - note = PAYMENT_NOTE
    - fee is flat, exactly as given
"""

from __future__ import annotations

from algopay.address import Address
from algopay.ledger import TransactionParams
from algopay.txn import Payment, Transaction

# Number of rounds after last_round during which the transaction stays valid.
VALIDITY_WINDOW = 10

# Note attached to every payment built here.
PAYMENT_NOTE = "Hello Python! 🐍".encode("utf-8")


def build_payment_transaction(
    sender: Address,
    receiver: Address,
    amount: int,
    fee: int,
    params: TransactionParams,
    *,
    note: bytes = PAYMENT_NOTE,
) -> Transaction:
    """Build an unsigned payment transaction.

    Args:
        sender: Paying account.
        receiver: Receiving account.
        amount: Amount in micro-units.
        fee: Flat fee in micro-units.
        params: Parameters from LedgerClient.transaction_params().
        note: Note bytes. Defaults to PAYMENT_NOTE.

    Returns:
        Immutable Transaction with a Payment payload.
    """
    return Transaction(
        sender=sender,
        fee=fee,
        first_valid=params.last_round,
        last_valid=params.last_round + VALIDITY_WINDOW,
        genesis_id=params.genesis_id,
        genesis_hash=params.genesis_hash,
        note=note,
        payload=Payment(amount=amount, receiver=receiver),
    )
