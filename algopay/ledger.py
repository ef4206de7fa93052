"""
Ledger client protocol: the network boundary.

Defines the interface the orchestrator depends on, not a concrete
implementation. The orchestrator never talks HTTP itself.

Concrete implementations:
    - AlgodClient (algod v2 REST, see algod_client.py)
    - FakeLedger (tests)

The protocol has exactly two methods:
    - transaction_params() → TransactionParams
    - broadcast_raw_transaction(signed_bytes) → BroadcastResult

Failures raise NetworkError. Timeouts belong to the implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from algopay.txn import HASH_LEN, U64_MAX


@dataclass(frozen=True)
class TransactionParams:
    """Network parameters needed to build a transaction.

    Attributes:
        last_round: Latest round known to the node.
        genesis_id: Network identifier, e.g. "testnet-v1.0".
        genesis_hash: 32-byte genesis hash.
        min_fee: Minimum flat fee accepted by the node, when reported.
    """

    last_round: int
    genesis_id: str
    genesis_hash: bytes
    min_fee: int | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.last_round <= U64_MAX:
            raise ValueError(f"last_round out of range: {self.last_round!r}")
        if len(self.genesis_hash) != HASH_LEN:
            raise ValueError(
                f"genesis_hash must be {HASH_LEN} bytes, got {len(self.genesis_hash)}"
            )


@dataclass(frozen=True)
class BroadcastResult:
    """Result of broadcasting a signed transaction.

    Attributes:
        tx_id: Ledger-assigned transaction id.
    """

    tx_id: str


@runtime_checkable
class LedgerClient(Protocol):
    """Interface for ledger node operations."""

    async def transaction_params(self) -> TransactionParams:
        """Fetch the parameters for a new transaction.

        Raises:
            NetworkError: If the node cannot be reached or replies
                with something unusable.
        """
        ...

    async def broadcast_raw_transaction(self, signed_bytes: bytes) -> BroadcastResult:
        """Submit raw signed transaction bytes.

        Raises:
            NetworkError: If the node rejects or never receives them.
        """
        ...
