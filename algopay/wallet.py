"""
Wallet bridge protocol: the secrets boundary.

The signing wallet is an external, user-controlled agent. This library
hands it a wire transaction object and receives a transaction id and
the raw signed bytes. It never sees keys and never inspects signatures.

Concrete implementations live with the host application (browser
bridge, wallet connector, ...). Tests use a FakeWallet.

Both methods make a single external round trip. Failures are opaque and
are never retried here; the caller asks the user to try again.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from algopay.address import Address
from algopay.errors import EncodingFailure, InvalidAddress, WalletError
from algopay.wire import WireValue


@dataclass(frozen=True)
class SignedTransaction:
    """Signed transaction as returned by the wallet.

    Attributes:
        tx_id: Transaction id computed by the wallet.
        blob: Raw signed transaction bytes, broadcast as-is.
    """

    tx_id: str
    blob: bytes

    @classmethod
    def from_wire(cls, raw: Any) -> SignedTransaction:
        """Build from the wallet's ``{"txID": ..., "blob": ...}`` reply.

        ``blob`` may arrive as bytes, a list of byte values, or a base64
        string depending on how the bridge marshals it.

        Raises:
            WalletError: If the reply does not have that shape.
        """
        if isinstance(raw, SignedTransaction):
            return raw
        if not isinstance(raw, dict):
            raise WalletError(
                f"Error signing transaction: unexpected reply {raw!r}",
                details={"reply_type": type(raw).__name__},
            )
        tx_id = raw.get("txID")
        if not isinstance(tx_id, str) or not tx_id:
            raise WalletError(
                "Error signing transaction: reply has no txID",
                details={"keys": sorted(raw)},
            )
        return cls(tx_id=tx_id, blob=_blob_bytes(raw.get("blob")))


def _blob_bytes(blob: Any) -> bytes:
    if isinstance(blob, (bytes, bytearray)):
        return bytes(blob)
    if isinstance(blob, str):
        try:
            return base64.b64decode(blob, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise WalletError(
                "Error signing transaction: blob is not base64",
            ) from exc
    if isinstance(blob, list):
        try:
            return bytes(blob)
        except (TypeError, ValueError) as exc:
            raise WalletError(
                "Error signing transaction: blob is not a byte array",
            ) from exc
    raise WalletError(
        f"Error signing transaction: unexpected blob {type(blob).__name__}",
    )


def parse_addresses(raw: Sequence[Any]) -> tuple[Address, ...]:
    """Parse the connect reply (address strings) into Address values.

    Order is preserved.

    Raises:
        WalletError: If the reply is not a list or tuple.
        EncodingFailure: If any entry is not a valid address.
    """
    if not isinstance(raw, (list, tuple)):
        raise WalletError(
            f"unexpected connect reply: {type(raw).__name__}",
            details={"reply_type": type(raw).__name__},
        )
    addresses: list[Address] = []
    for index, item in enumerate(raw):
        if isinstance(item, Address):
            addresses.append(item)
            continue
        try:
            addresses.append(Address.parse(item))
        except InvalidAddress as exc:
            raise EncodingFailure(
                f"wallet returned a malformed address at index {index}: {item!r}",
                details={"index": index},
            ) from exc
    return tuple(addresses)


@runtime_checkable
class WalletBridge(Protocol):
    """Interface for the external signing wallet."""

    async def connect(self) -> Sequence[str | Address]:
        """Run the wallet's connect flow.

        Returns:
            Addresses the user shared, in the wallet's order.
        """
        ...

    async def sign(self, wire_txn: dict[str, WireValue]) -> SignedTransaction | dict[str, Any]:
        """Ask the user to sign a wire transaction.

        Returns:
            A SignedTransaction, or the raw ``{"txID", "blob"}`` reply.
        """
        ...
