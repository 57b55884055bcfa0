"""
Broadcaster — submits a signed transaction to the node, exactly once.

A broadcast has real, non-idempotent effect on the ledger. There is no
retry here and none should be added: a timeout does not mean the
transaction was dropped, and resubmitting could double-spend. A caller
that wants to try again must build a fresh transaction.
"""

from __future__ import annotations

import logging
from typing import Any

from trc20_sender.errors import (
    BroadcastRejected,
    NodeTransportError,
    classify_broadcast_code,
    decode_node_message,
)
from trc20_sender.schema import BROADCAST_RESPONSE_SCHEMA, schema_errors
from trc20_sender.transaction import SignedTransaction
from trc20_sender.transport import NodeTransport

logger = logging.getLogger(__name__)

BROADCAST_PATH = "/wallet/broadcasttransaction"


class Broadcaster:
    """Submits signed transactions via ``/wallet/broadcasttransaction``."""

    def __init__(self, base_url: str, transport: NodeTransport) -> None:
        self._url = base_url.rstrip("/") + BROADCAST_PATH
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    async def submit(self, signed: SignedTransaction) -> str:
        """Broadcast ``signed`` and return its transaction id.

        Raises:
            BroadcastRejected: If the node rejects the transaction, the
                reply is malformed, or the request fails in transport. In
                the transport case the outcome on the ledger is unknown.
        """
        try:
            response = await self._transport.post_json(self._url, signed.to_broadcast_body())
        except NodeTransportError as exc:
            logger.warning(
                "broadcast of %s failed in transport, outcome unknown: %s", signed.tx_id, exc
            )
            raise BroadcastRejected(
                f"broadcast failed, transaction {signed.tx_id} may or may not "
                f"have been accepted: {exc}",
                details={"txID": signed.tx_id, "transport_error": exc.error_code, **exc.details},
            ) from exc

        return parse_broadcast_response(response, signed.tx_id)


def parse_broadcast_response(response: dict[str, Any], tx_id: str) -> str:
    """Interpret a broadcasttransaction reply.

    Pure function, no I/O.

    Args:
        response: Decoded reply body.
        tx_id: Id of the submitted transaction, used when the node
            accepts without echoing ``txid``.

    Returns:
        The transaction id.

    Raises:
        BroadcastRejected: Unless ``result`` is exactly true.
    """
    problems = schema_errors(response, BROADCAST_RESPONSE_SCHEMA)
    if problems:
        raise BroadcastRejected(
            "malformed broadcast response: " + "; ".join(problems),
            details={"txID": tx_id, "schema_errors": problems},
        )

    if response.get("result") is True:
        return response.get("txid") or tx_id

    code = response.get("code")
    message = decode_node_message(response.get("message"))
    category = classify_broadcast_code(code)
    logger.warning("broadcast of %s rejected: code=%s message=%s", tx_id, code, message)
    raise BroadcastRejected(
        message or code or "broadcast rejected",
        error_code=code or BroadcastRejected.error_code,
        details={"txID": tx_id, "code": code, "category": str(category)},
    )
