"""
Tests for the payment transaction builder.

Test plan:
- Validity window: first_valid = last_round, last_valid = last_round + 10
- Network fields copied verbatim
- Fee, note and payload as given
- Result is immutable
- Overflow of the validity window is rejected by the model
"""

import dataclasses

import pytest

from algopay.address import Address
from algopay.builder import PAYMENT_NOTE, VALIDITY_WINDOW, build_payment_transaction
from algopay.ledger import TransactionParams
from algopay.txn import U64_MAX, Payment

SENDER = Address(b"\x01" * 32)
RECEIVER = Address(b"\x02" * 32)
GENESIS_HASH = b"\x5a" * 32
PARAMS = TransactionParams(last_round=500, genesis_id="testnet-v1.0", genesis_hash=GENESIS_HASH)


def _build(**overrides: object):
    kwargs: dict[str, object] = {
        "sender": SENDER,
        "receiver": RECEIVER,
        "amount": 1000,
        "fee": 10,
        "params": PARAMS,
    }
    kwargs.update(overrides)
    return build_payment_transaction(**kwargs)  # type: ignore[arg-type]


class TestValidityWindow:
    def test_first_valid_is_last_round(self) -> None:
        assert _build().first_valid == 500

    def test_last_valid_is_ten_rounds_later(self) -> None:
        assert VALIDITY_WINDOW == 10
        assert _build().last_valid == 510

    def test_window_overflow_rejected(self) -> None:
        params = TransactionParams(last_round=U64_MAX, genesis_id="x", genesis_hash=GENESIS_HASH)
        with pytest.raises(ValueError):
            _build(params=params)


class TestFields:
    def test_network_fields_copied(self) -> None:
        txn = _build()
        assert txn.genesis_id == "testnet-v1.0"
        assert txn.genesis_hash == GENESIS_HASH

    def test_sender_and_fee(self) -> None:
        txn = _build()
        assert txn.sender == SENDER
        assert txn.fee == 10

    def test_payload_is_payment(self) -> None:
        txn = _build()
        assert txn.payload == Payment(amount=1000, receiver=RECEIVER)

    def test_default_note(self) -> None:
        assert _build().note == PAYMENT_NOTE

    def test_custom_note(self) -> None:
        assert _build(note=b"memo").note == b"memo"

    def test_no_optional_common_fields(self) -> None:
        txn = _build()
        assert txn.group is None
        assert txn.lease is None
        assert txn.rekey_to is None


class TestImmutability:
    def test_frozen(self) -> None:
        txn = _build()
        with pytest.raises(dataclasses.FrozenInstanceError):
            txn.fee = 20  # type: ignore[misc]
