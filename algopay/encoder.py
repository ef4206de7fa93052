"""
Transaction encoder for the signing wallet.

Maps a Transaction onto the wallet's loosely-typed JSON transaction
object. Pure: no I/O, no secrets.

Steps:
    1. Common fields (fee, rounds, genesis, sender, group, lease, note,
       rekeyTo, type).
    2. Variant fields, with an explicit None for every optional field
       that is not set.
    3. Both are merged into an empty object; None deletes the key, so
       absent optional fields are omitted rather than sent as null.

Encodings:
    - Addresses: canonical 58-char text form.
    - genesisHash, group, lease: standard base64.
    - voteKey, selectionKey: base32 (RFC 4648, padded).
    - note: JSON array of byte values.

``flatFee`` is always true: the fee is fixed by the caller and never
computed per byte by the node.

AssetTransfer, AssetAccept and AssetClawback all carry the ``axfer``
tag. They differ only in which optional fields are populated.
"""

from __future__ import annotations

import base64
import logging
from typing import assert_never

from algopay.address import Address
from algopay.errors import EncodingFailure, UnsupportedVariant
from algopay.txn import (
    HASH_LEN,
    PARTICIPATION_KEY_LEN,
    ApplicationCall,
    AssetAccept,
    AssetClawback,
    AssetConfiguration,
    AssetFreeze,
    AssetTransfer,
    KeyRegistration,
    Payment,
    Transaction,
    TxnPayload,
    TxnType,
)
from algopay.wire import WireValue, dumps_wire, merge

logger = logging.getLogger(__name__)


def encode_transaction(txn: Transaction) -> dict[str, WireValue]:
    """Encode a transaction into the wallet's wire format.

    Args:
        txn: The unsigned transaction.

    Returns:
        Wire object with common and variant keys, no null values.

    Raises:
        UnsupportedVariant: If the payload is an ApplicationCall.
        EncodingFailure: If an address or binary field is malformed.
    """
    wire: dict[str, WireValue] = {}
    merge(wire, _common_fields(txn))
    merge(wire, _type_fields(txn.payload))
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Wire transaction: %s", dumps_wire(wire))
    return wire


def txn_type(payload: TxnPayload) -> TxnType:
    """Wire type tag for a variant payload."""
    match payload:
        case Payment():
            return TxnType.PAYMENT
        case KeyRegistration():
            return TxnType.KEY_REGISTRATION
        case AssetConfiguration():
            return TxnType.ASSET_CONFIG
        case AssetTransfer() | AssetAccept() | AssetClawback():
            return TxnType.ASSET_TRANSFER
        case AssetFreeze():
            return TxnType.ASSET_FREEZE
        case ApplicationCall():
            return TxnType.APPLICATION_CALL
        case _:
            assert_never(payload)


# =========================================================================
# Field encoders
# =========================================================================


def _address(value: Address | None) -> str | None:
    if value is None:
        return None
    if not isinstance(value, Address):
        raise EncodingFailure(
            f"expected an Address, got: {value!r}",
            details={"value": repr(value)},
        )
    return value.encode()


def _base64(name: str, value: bytes | None, length: int = HASH_LEN) -> str | None:
    if value is None:
        return None
    if len(value) != length:
        raise EncodingFailure(
            f"{name} must be {length} bytes, got {len(value)}",
            details={"field": name, "length": len(value)},
        )
    return base64.b64encode(value).decode("ascii")


def _base32(name: str, value: bytes | None) -> str | None:
    if value is None:
        return None
    if len(value) != PARTICIPATION_KEY_LEN:
        raise EncodingFailure(
            f"{name} must be {PARTICIPATION_KEY_LEN} bytes, got {len(value)}",
            details={"field": name, "length": len(value)},
        )
    return base64.b32encode(value).decode("ascii")


def _note(value: bytes | None) -> list[WireValue] | None:
    if value is None:
        return None
    return list(value)


# =========================================================================
# Common and variant field sets
# =========================================================================


def _common_fields(txn: Transaction) -> dict[str, WireValue]:
    return {
        "fee": txn.fee,
        "flatFee": True,
        "firstRound": txn.first_valid,
        "lastRound": txn.last_valid,
        "genesisHash": _base64("genesisHash", txn.genesis_hash),
        "from": _address(txn.sender),
        "genesisId": txn.genesis_id,
        "group": _base64("group", txn.group),
        "lease": _base64("lease", txn.lease),
        "note": _note(txn.note),
        "rekeyTo": _address(txn.rekey_to),
        "type": str(txn_type(txn.payload)),
    }


def _type_fields(payload: TxnPayload) -> dict[str, WireValue]:
    match payload:
        case Payment():
            return {
                "amount": payload.amount,
                "to": _address(payload.receiver),
                "closeRemainderTo": _address(payload.close_remainder_to),
            }
        case KeyRegistration():
            return {
                "voteKey": _base32("voteKey", payload.vote_pk),
                "selectionKey": _base32("selectionKey", payload.selection_pk),
                "voteFirst": payload.vote_first,
                "voteLast": payload.vote_last,
                "voteKeyDilution": payload.vote_key_dilution,
            }
        case AssetConfiguration():
            params = payload.params
            return {
                "assetName": params.asset_name,
                "assetUnitName": params.unit_name,
                "assetDecimals": params.decimals,
                "assetTotal": params.total,
                "assetURL": params.url,
                "assetFreeze": _address(params.freeze),
                "assetManager": _address(params.manager),
                "assetReserve": _address(params.reserve),
                "assetDefaultFrozen": params.default_frozen,
            }
        case AssetTransfer():
            return {
                "assetIndex": payload.xfer,
                "to": _address(payload.receiver),
                "amount": payload.amount,
                "closeRemainderTo": _address(payload.close_to),
                "assetSender": None,
            }
        case AssetAccept():
            return {
                "assetIndex": payload.xfer,
                "to": _address(payload.receiver),
                "amount": None,
                "closeRemainderTo": None,
                "assetSender": None,
            }
        case AssetClawback():
            # TODO confirm "assetSender" against the wallet's clawback schema
            return {
                "assetIndex": payload.xfer,
                "to": _address(payload.asset_receiver),
                "amount": payload.asset_amount,
                "closeRemainderTo": None,
                "assetSender": _address(payload.asset_sender),
            }
        case AssetFreeze():
            return {
                "assetIndex": payload.asset_id,
                "freezeAccount": _address(payload.freeze_account),
                "freezeState": payload.frozen,
            }
        case ApplicationCall():
            raise UnsupportedVariant(
                f"Not supported transaction type: {TxnType.APPLICATION_CALL}",
                details={"type": str(TxnType.APPLICATION_CALL), "app_id": payload.app_id},
            )
        case _:
            assert_never(payload)
