"""
Headless payment session.

Holds what a payment form holds (connected address, the three raw
inputs, the last outcome message) and turns orchestrator results into
the messages shown to the user. No rendering, no event loop.
"""

from __future__ import annotations

from dataclasses import replace

from algopay.address import Address
from algopay.errors import PaymentError
from algopay.provider import (
    CONNECT_ERROR_PREFIX,
    PaymentInputs,
    PaymentOrchestrator,
    validate_payment_inputs,
)

NOT_CONNECTED_MSG = "Not connected or no addresses"


class PaymentSession:
    """One user's connect-and-send session.

    Args:
        orchestrator: The orchestrator to drive.
    """

    def __init__(self, orchestrator: PaymentOrchestrator) -> None:
        self._orchestrator = orchestrator
        self.address: Address | None = None
        self.inputs = PaymentInputs()
        self.result_message: str | None = None

    def update_receiver(self, value: str) -> None:
        self.inputs = replace(self.inputs, receiver=value)

    def update_amount(self, value: str) -> None:
        self.inputs = replace(self.inputs, amount=value)

    def update_fee(self, value: str) -> None:
        self.inputs = replace(self.inputs, fee=value)

    async def connect(self) -> Address | None:
        """Connect the wallet. On failure, the error becomes the message."""
        try:
            self.address = await self._orchestrator.connect_wallet()
        except PaymentError as exc:
            message = str(exc)
            if not message.startswith(CONNECT_ERROR_PREFIX):
                message = CONNECT_ERROR_PREFIX + message
            self.result_message = message
            return None
        return self.address

    async def send(self) -> str:
        """Validate inputs and send. Returns the outcome message."""
        if self.address is None:
            self.result_message = NOT_CONNECTED_MSG
            return self.result_message

        inputs = self.inputs
        try:
            validated = validate_payment_inputs(inputs.receiver, inputs.amount, inputs.fee)
            tx_id = await self._orchestrator.send_payment(self.address, validated)
        except PaymentError as exc:
            self.result_message = f"Error: {exc}"
        else:
            self.result_message = f"Success! Tx id: {tx_id}"
        return self.result_message
