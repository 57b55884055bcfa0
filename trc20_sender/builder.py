"""
Transaction builder — asks the node to construct the unsigned call.

Sends one ``/wallet/triggersmartcontract`` request and turns the reply
into an ``UnsignedTransaction``. The node owns every piece of
construction state (reference block, expiration, timestamp); this side
only supplies owner, contract, call arguments and the fee ceiling.

Response handling, in order:
    1. ``Error`` field present → RemoteConstructionError.
    2. ``result.result`` is not true → RemoteConstructionError with the
       node's (hex-decoded) message and code.
    3. Schema check on ``transaction`` (txID, raw_data, raw_data_hex).
    4. sha256(raw_data_hex) must equal txID.

Only then is the transaction handed on, so signing never sees a missing
or partial body.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Any

from trc20_sender import address
from trc20_sender.abi import SELECTOR_LENGTH, TRANSFER_SELECTOR, TRANSFER_SIGNATURE
from trc20_sender.errors import (
    NodeTransportError,
    RemoteConstructionError,
    decode_node_message,
)
from trc20_sender.schema import TRIGGER_RESPONSE_SCHEMA, schema_errors
from trc20_sender.transaction import UnsignedTransaction
from trc20_sender.transport import NodeTransport

logger = logging.getLogger(__name__)

TRIGGER_PATH = "/wallet/triggersmartcontract"


class TransactionBuilder:
    """Builds unsigned TRC20 transfer transactions through the node.

    Args:
        base_url: Node base URL without trailing slash.
        transport: Transport used for the single POST.
    """

    def __init__(self, base_url: str, transport: NodeTransport) -> None:
        self._url = base_url.rstrip("/") + TRIGGER_PATH
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    async def build(
        self,
        owner: bytes,
        contract: bytes,
        call_data: bytes,
        fee_limit: int,
    ) -> UnsignedTransaction:
        """Construct the unsigned transaction for ``call_data``.

        Args:
            owner: Raw sender address.
            contract: Raw token contract address.
            call_data: Full call data, selector included (68 bytes for a
                transfer). Only the arguments go into ``parameter``.
            fee_limit: Energy fee ceiling in sun.

        Raises:
            RemoteConstructionError: On node rejection, malformed reply,
                or transport failure.
        """
        if call_data[:SELECTOR_LENGTH] != TRANSFER_SELECTOR:
            raise ValueError("call_data does not start with the transfer selector")

        payload = {
            "owner_address": address.encode(owner),
            "contract_address": address.encode(contract),
            "function_selector": TRANSFER_SIGNATURE,
            "parameter": call_data[SELECTOR_LENGTH:].hex(),
            "fee_limit": fee_limit,
            "call_value": 0,
            "visible": True,
        }

        try:
            response = await self._transport.post_json(self._url, payload)
        except NodeTransportError as exc:
            logger.warning("transaction construction failed: %s", exc)
            raise RemoteConstructionError(
                f"transaction construction failed: {exc}",
                details={"transport_error": exc.error_code, **exc.details},
            ) from exc

        return parse_trigger_response(response)


def parse_trigger_response(response: dict[str, Any]) -> UnsignedTransaction:
    """Turn a triggersmartcontract reply into an UnsignedTransaction.

    Pure function, no I/O.

    Raises:
        RemoteConstructionError: If the node reported an error or the
            reply is missing or inconsistent in any required field.
    """
    if response.get("Error") is not None:
        # The Error field is plain text, never hex-encoded.
        message = str(response["Error"])
        raise RemoteConstructionError(
            f"node error: {message}",
            details={"node_error": message},
        )

    result = response.get("result")
    if not isinstance(result, dict) or result.get("result") is not True:
        code = result.get("code") if isinstance(result, dict) else None
        message = decode_node_message(result.get("message")) if isinstance(result, dict) else None
        raise RemoteConstructionError(
            message or "node did not report a successful construction",
            details={"code": code, "node_message": message},
        )

    problems = schema_errors(response, TRIGGER_RESPONSE_SCHEMA)
    if problems:
        raise RemoteConstructionError(
            "malformed construction response: " + "; ".join(problems),
            details={"schema_errors": problems},
        )

    transaction = response["transaction"]
    tx_id = transaction["txID"].lower()
    raw_data_hex = transaction["raw_data_hex"].lower()

    computed = hashlib.sha256(bytes.fromhex(raw_data_hex)).hexdigest()
    if computed != tx_id:
        raise RemoteConstructionError(
            "txID does not match sha256(raw_data_hex)",
            details={"txID": tx_id, "computed": computed},
        )

    return UnsignedTransaction(
        tx_id=tx_id,
        raw_data=transaction["raw_data"],
        raw_data_hex=raw_data_hex,
    )
