"""
Tests for PaymentSession outcome messages.

Test plan:
- send before connect → "Not connected or no addresses", no calls
- connect success stores the address; failure becomes the message with
  the "Error connecting wallet: " prefix exactly once, including a
  raising wallet and a reply that is not a list
- send success → "Success! Tx id: ..."
- invalid input → "Error: ..." without touching ledger or wallet
- ledger failure → "Error: ..." with the node's message
"""

from typing import Any

import pytest

from algopay.address import Address
from algopay.errors import NetworkError, WalletError
from algopay.ledger import BroadcastResult, TransactionParams
from algopay.provider import PaymentOrchestrator
from algopay.session import NOT_CONNECTED_MSG, PaymentSession
from algopay.wallet import SignedTransaction
from algopay.wire import WireValue

SENDER = Address(b"\x01" * 32)
RECEIVER = Address(b"\x02" * 32)
PARAMS = TransactionParams(last_round=500, genesis_id="testnet-v1.0", genesis_hash=b"\x00" * 32)


class FakeLedger:
    def __init__(self, *, broadcast_should_raise: Exception | None = None) -> None:
        self._broadcast_should_raise = broadcast_should_raise
        self.calls: list[str] = []

    async def transaction_params(self) -> TransactionParams:
        self.calls.append("params")
        return PARAMS

    async def broadcast_raw_transaction(self, signed_bytes: bytes) -> BroadcastResult:
        self.calls.append("broadcast")
        if self._broadcast_should_raise is not None:
            raise self._broadcast_should_raise
        return BroadcastResult(tx_id="TXID42")


class FakeWallet:
    def __init__(
        self,
        *,
        addresses: Any = (str(SENDER),),
        connect_should_raise: Exception | None = None,
    ) -> None:
        self._addresses = addresses
        self._connect_should_raise = connect_should_raise
        self.calls: list[str] = []

    async def connect(self) -> Any:
        self.calls.append("connect")
        if self._connect_should_raise is not None:
            raise self._connect_should_raise
        return self._addresses

    async def sign(self, wire_txn: dict[str, WireValue]) -> Any:
        self.calls.append("sign")
        return SignedTransaction(tx_id="TXID42", blob=b"\x01")


def _session(
    ledger: FakeLedger | None = None,
    wallet: FakeWallet | None = None,
) -> tuple[PaymentSession, FakeLedger, FakeWallet]:
    ledger = ledger or FakeLedger()
    wallet = wallet or FakeWallet()
    return PaymentSession(PaymentOrchestrator(ledger, wallet)), ledger, wallet


def _fill(session: PaymentSession, amount: str = "1000") -> None:
    session.update_receiver(str(RECEIVER))
    session.update_amount(amount)
    session.update_fee("10")


class TestConnect:
    @pytest.mark.asyncio
    async def test_stores_address(self) -> None:
        session, _, _ = _session()
        assert await session.connect() == SENDER
        assert session.address == SENDER
        assert session.result_message is None

    @pytest.mark.asyncio
    async def test_no_addresses_message(self) -> None:
        session, _, _ = _session(wallet=FakeWallet(addresses=[]))
        assert await session.connect() is None
        assert session.address is None
        assert session.result_message is not None
        assert session.result_message == (
            "Error connecting wallet: "
            "Unexpected: wallet connect succeeded but returned no addresses"
        )

    @pytest.mark.asyncio
    async def test_wallet_exception_prefixed_once(self) -> None:
        wallet = FakeWallet(connect_should_raise=RuntimeError("user closed popup"))
        session, _, _ = _session(wallet=wallet)
        assert await session.connect() is None
        assert session.result_message == "Error connecting wallet: user closed popup"

    @pytest.mark.asyncio
    async def test_wallet_error_gets_prefix(self) -> None:
        wallet = FakeWallet(connect_should_raise=WalletError("user rejected"))
        session, _, _ = _session(wallet=wallet)
        await session.connect()
        assert session.result_message == "Error connecting wallet: user rejected"

    @pytest.mark.asyncio
    async def test_non_list_reply_is_a_message(self) -> None:
        session, _, _ = _session(wallet=FakeWallet(addresses=None))
        assert await session.connect() is None
        assert session.address is None
        assert session.result_message == "Error connecting wallet: unexpected connect reply: NoneType"


class TestSend:
    @pytest.mark.asyncio
    async def test_not_connected(self) -> None:
        session, ledger, wallet = _session()
        _fill(session)
        assert await session.send() == NOT_CONNECTED_MSG
        assert ledger.calls == []
        assert wallet.calls == []

    @pytest.mark.asyncio
    async def test_success(self) -> None:
        session, _, _ = _session()
        await session.connect()
        _fill(session)
        assert await session.send() == "Success! Tx id: TXID42"
        assert session.result_message == "Success! Tx id: TXID42"

    @pytest.mark.asyncio
    async def test_invalid_amount_makes_no_calls(self) -> None:
        session, ledger, wallet = _session()
        await session.connect()
        _fill(session, amount="abc")
        message = await session.send()
        assert message == "Error: invalid amount: 'abc'"
        assert ledger.calls == []
        assert wallet.calls == ["connect"]

    @pytest.mark.asyncio
    async def test_network_failure(self) -> None:
        ledger = FakeLedger(broadcast_should_raise=NetworkError("HTTP 400: overspend"))
        session, _, _ = _session(ledger=ledger)
        await session.connect()
        _fill(session)
        assert await session.send() == "Error: HTTP 400: overspend"

    def test_inputs_updated(self) -> None:
        session, _, _ = _session()
        _fill(session, amount="7")
        assert session.inputs.receiver == str(RECEIVER)
        assert session.inputs.amount == "7"
        assert session.inputs.fee == "10"
