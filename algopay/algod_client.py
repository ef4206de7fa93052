"""
algod v2 REST client: real network implementation of LedgerClient.

Translates the node's JSON replies into TransactionParams and
BroadcastResult. Uses an injectable transport (HttpTransport) so the
HTTP layer can be swapped for test fakes without changing parsing.

No retry loops. No secrets beyond the API token header.

Endpoints:
    - GET  /v2/transactions/params
        {"last-round": int, "genesis-id": str, "genesis-hash": b64, "min-fee": int, ...}
    - POST /v2/transactions  (body: raw signed bytes, application/x-binary)
        {"txId": str}
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any

from algopay.config import AlgodConfig
from algopay.errors import NetworkError, NetworkFailureReason
from algopay.ledger import BroadcastResult, TransactionParams
from algopay.transport import HttpTransport, HttpxTransport

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Algo-API-Token"
PARAMS_PATH = "/v2/transactions/params"
TRANSACTIONS_PATH = "/v2/transactions"


class AlgodClient:
    """algod client implementing the LedgerClient protocol.

    Args:
        url: Node base URL (e.g. "http://localhost:4001").
        token: API token. Empty string sends no token header.
        transport: Injectable transport. Defaults to HttpxTransport.
    """

    def __init__(
        self,
        url: str,
        token: str = "",
        transport: HttpTransport | None = None,
    ) -> None:
        self._url = url.rstrip("/")
        self._token = token
        self._transport = transport or HttpxTransport()

    @classmethod
    def from_config(
        cls,
        config: AlgodConfig,
        transport: HttpTransport | None = None,
    ) -> AlgodClient:
        return cls(
            config.url,
            config.token,
            transport=transport or HttpxTransport(timeout_s=config.timeout_s),
        )

    @property
    def url(self) -> str:
        return self._url

    def _headers(self, **extra: str) -> dict[str, str]:
        headers = dict(extra)
        if self._token:
            headers[TOKEN_HEADER] = self._token
        return headers

    # -----------------------------------------------------------------
    # LedgerClient protocol methods
    # -----------------------------------------------------------------

    async def transaction_params(self) -> TransactionParams:
        response = await self._transport.get_json(
            self._url + PARAMS_PATH, self._headers()
        )
        params = _parse_params_response(response)
        logger.debug(
            "Transaction params: last_round=%d genesis_id=%s",
            params.last_round,
            params.genesis_id,
        )
        return params

    async def broadcast_raw_transaction(self, signed_bytes: bytes) -> BroadcastResult:
        response = await self._transport.post_bytes(
            self._url + TRANSACTIONS_PATH,
            signed_bytes,
            self._headers(**{"Content-Type": "application/x-binary"}),
        )
        result = _parse_broadcast_response(response)
        logger.debug("Broadcast txn res: %s", result)
        return result


# =====================================================================
# Response parsing (pure functions, no I/O)
# =====================================================================


def _malformed(detail: str, response: dict[str, Any]) -> NetworkError:
    return NetworkError(
        f"Malformed node response: {detail}",
        details={
            "reason": NetworkFailureReason.MALFORMED_RESPONSE,
            "keys": sorted(response),
        },
    )


def _parse_params_response(response: dict[str, Any]) -> TransactionParams:
    last_round = response.get("last-round")
    genesis_id = response.get("genesis-id")
    genesis_hash_b64 = response.get("genesis-hash")
    min_fee = response.get("min-fee")

    if isinstance(last_round, bool) or not isinstance(last_round, int):
        raise _malformed("last-round missing or not an integer", response)
    if not isinstance(genesis_id, str):
        raise _malformed("genesis-id missing", response)
    if not isinstance(genesis_hash_b64, str):
        raise _malformed("genesis-hash missing", response)
    if min_fee is not None and not isinstance(min_fee, int):
        raise _malformed("min-fee is not an integer", response)

    try:
        genesis_hash = base64.b64decode(genesis_hash_b64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise _malformed("genesis-hash is not base64", response) from exc

    try:
        return TransactionParams(
            last_round=last_round,
            genesis_id=genesis_id,
            genesis_hash=genesis_hash,
            min_fee=min_fee,
        )
    except ValueError as exc:
        raise _malformed(str(exc), response) from exc


def _parse_broadcast_response(response: dict[str, Any]) -> BroadcastResult:
    tx_id = response.get("txId")
    if not isinstance(tx_id, str) or not tx_id:
        raise _malformed("txId missing", response)
    return BroadcastResult(tx_id=tx_id)
