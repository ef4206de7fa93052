"""
Transaction model.

A Transaction is a set of common fields plus exactly one variant
payload. The variants form a closed set:

    Payment, KeyRegistration, AssetConfiguration, AssetTransfer,
    AssetAccept, AssetClawback, AssetFreeze, ApplicationCall

All types are frozen dataclasses. A Transaction is built once for a
single request and never mutated afterwards.

Invariants (checked at construction, ValueError on violation):
    - Amounts, fees, rounds and asset ids fit in an unsigned 64-bit int.
    - genesis_hash, group and lease are exactly 32 bytes.
    - Vote and selection keys are exactly 32 bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum

from algopay.address import Address

U64_MAX = 2**64 - 1

# Byte length of genesis hash, group id and lease.
HASH_LEN = 32

# Byte length of participation vote and VRF selection keys.
PARTICIPATION_KEY_LEN = 32


def _validate_u64(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U64_MAX:
        raise ValueError(f"{name} must be an unsigned 64-bit integer, got: {value!r}")


def _validate_optional_u64(name: str, value: int | None) -> None:
    if value is not None:
        _validate_u64(name, value)


def _validate_bytes(name: str, value: bytes | None, length: int) -> None:
    if value is None:
        return
    if not isinstance(value, bytes) or len(value) != length:
        raise ValueError(f"{name} must be {length} bytes, got: {value!r}")


# =========================================================================
# Type tags
# =========================================================================


class TxnType(StrEnum):
    """Wire type tag. Several variants share the ``axfer`` tag."""

    PAYMENT = "pay"
    KEY_REGISTRATION = "keyreg"
    ASSET_CONFIG = "acfg"
    ASSET_TRANSFER = "axfer"
    ASSET_FREEZE = "afrz"
    APPLICATION_CALL = "appl"


class OnComplete(IntEnum):
    """Action performed after an application call."""

    NO_OP = 0
    OPT_IN = 1
    CLOSE_OUT = 2
    CLEAR_STATE = 3
    UPDATE_APPLICATION = 4
    DELETE_APPLICATION = 5


# =========================================================================
# Variant payloads
# =========================================================================


@dataclass(frozen=True)
class Payment:
    amount: int
    receiver: Address
    close_remainder_to: Address | None = None

    def __post_init__(self) -> None:
        _validate_u64("amount", self.amount)


@dataclass(frozen=True)
class KeyRegistration:
    """Online/offline participation key registration.

    All fields absent means "go offline".
    """

    vote_pk: bytes | None = None
    selection_pk: bytes | None = None
    vote_first: int | None = None
    vote_last: int | None = None
    vote_key_dilution: int | None = None

    def __post_init__(self) -> None:
        _validate_bytes("vote_pk", self.vote_pk, PARTICIPATION_KEY_LEN)
        _validate_bytes("selection_pk", self.selection_pk, PARTICIPATION_KEY_LEN)
        _validate_optional_u64("vote_first", self.vote_first)
        _validate_optional_u64("vote_last", self.vote_last)
        _validate_optional_u64("vote_key_dilution", self.vote_key_dilution)


@dataclass(frozen=True)
class AssetParams:
    total: int
    decimals: int = 0
    default_frozen: bool = False
    unit_name: str | None = None
    asset_name: str | None = None
    url: str | None = None
    manager: Address | None = None
    reserve: Address | None = None
    freeze: Address | None = None

    def __post_init__(self) -> None:
        _validate_u64("total", self.total)
        if not 0 <= self.decimals <= 2**32 - 1:
            raise ValueError(f"decimals must be an unsigned 32-bit integer, got: {self.decimals!r}")


@dataclass(frozen=True)
class AssetConfiguration:
    params: AssetParams


@dataclass(frozen=True)
class AssetTransfer:
    xfer: int
    amount: int
    receiver: Address
    close_to: Address | None = None

    def __post_init__(self) -> None:
        _validate_u64("xfer", self.xfer)
        _validate_u64("amount", self.amount)


@dataclass(frozen=True)
class AssetAccept:
    """Opt-in: a zero-amount transfer of the asset to the sender itself."""

    xfer: int
    receiver: Address

    def __post_init__(self) -> None:
        _validate_u64("xfer", self.xfer)


@dataclass(frozen=True)
class AssetClawback:
    xfer: int
    asset_amount: int
    asset_sender: Address
    asset_receiver: Address

    def __post_init__(self) -> None:
        _validate_u64("xfer", self.xfer)
        _validate_u64("asset_amount", self.asset_amount)


@dataclass(frozen=True)
class AssetFreeze:
    asset_id: int
    freeze_account: Address
    frozen: bool

    def __post_init__(self) -> None:
        _validate_u64("asset_id", self.asset_id)


@dataclass(frozen=True)
class ApplicationCall:
    app_id: int
    on_complete: OnComplete = OnComplete.NO_OP
    app_arguments: tuple[bytes, ...] = ()
    accounts: tuple[Address, ...] = ()
    foreign_apps: tuple[int, ...] = ()
    foreign_assets: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        _validate_u64("app_id", self.app_id)


TxnPayload = (
    Payment
    | KeyRegistration
    | AssetConfiguration
    | AssetTransfer
    | AssetAccept
    | AssetClawback
    | AssetFreeze
    | ApplicationCall
)


# =========================================================================
# Transaction
# =========================================================================


@dataclass(frozen=True)
class Transaction:
    """An unsigned ledger transaction.

    Attributes:
        sender: Account paying the fee and authorizing the transaction.
        fee: Flat fee in micro-units.
        first_valid: First round in which the transaction may be confirmed.
        last_valid: Last round in which the transaction may be confirmed.
        genesis_id: Network identifier string, e.g. "testnet-v1.0".
        genesis_hash: 32-byte network genesis hash.
        payload: The variant-specific part.
        note: Arbitrary bytes attached to the transaction.
        group: 32-byte group id for atomic transfers.
        lease: 32-byte lease for duplicate-submission prevention.
        rekey_to: New authorizing address for the sender account.
    """

    sender: Address
    fee: int
    first_valid: int
    last_valid: int
    genesis_id: str
    genesis_hash: bytes
    payload: TxnPayload
    note: bytes | None = None
    group: bytes | None = None
    lease: bytes | None = None
    rekey_to: Address | None = field(default=None)

    def __post_init__(self) -> None:
        _validate_u64("fee", self.fee)
        _validate_u64("first_valid", self.first_valid)
        _validate_u64("last_valid", self.last_valid)
        if self.genesis_hash is None:
            raise ValueError("genesis_hash is required")
        _validate_bytes("genesis_hash", self.genesis_hash, HASH_LEN)
        _validate_bytes("group", self.group, HASH_LEN)
        _validate_bytes("lease", self.lease, HASH_LEN)
        if self.note is not None and not isinstance(self.note, bytes):
            raise ValueError(f"note must be bytes, got: {self.note!r}")
