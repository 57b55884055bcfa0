"""
TRC20 transfer pipeline.

Composes the pure layer (address, amount, abi) with the impure node
boundary (builder, broadcaster) and the secrets boundary (signer):

    private key ──► sender address ─┐
    to address  ──► raw recipient ──┼─► call data ─► build ─► sign ─► broadcast
    amount      ──► smallest unit ──┘

All inputs are validated before the first network call. Each call to
``send`` is independent: the sender holds only its config and
transport, so one instance can serve concurrent requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from trc20_sender import address
from trc20_sender.abi import TRANSFER_SELECTOR, encode_transfer_call
from trc20_sender.amount import from_smallest_unit, to_smallest_unit
from trc20_sender.broadcaster import Broadcaster
from trc20_sender.builder import TransactionBuilder
from trc20_sender.config import TransferConfig
from trc20_sender.errors import TransferError
from trc20_sender.signer import TransactionSigner, load_private_key, sender_address
from trc20_sender.transport import HttpxTransport, NodeTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferResult:
    """Outcome of one transfer request.

    Exactly one of ``tx_id`` / ``error`` is set.
    """

    success: bool
    tx_id: str | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Upstream response shape: ``{success, txId?, error?}``."""
        result: dict[str, Any] = {"success": self.success}
        if self.tx_id is not None:
            result["txId"] = self.tx_id
        if self.error is not None:
            result["error"] = self.error
        return result


class TransferSender:
    """Sends TRC20 transfers described by a TransferConfig.

    Args:
        config: Deployment settings.
        transport: Node transport. Defaults to an HttpxTransport using the
            config's timeout and headers.
    """

    def __init__(
        self,
        config: TransferConfig,
        transport: NodeTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport or HttpxTransport(
            timeout=config.timeout_s,
            headers=config.headers,
        )
        self._contract = address.decode(config.contract_address)
        self._builder = TransactionBuilder(config.base_url, self._transport)
        self._signer = TransactionSigner(keep_recovery_byte=config.keep_recovery_byte)
        self._broadcaster = Broadcaster(config.base_url, self._transport)

    @property
    def config(self) -> TransferConfig:
        return self._config

    async def send(self, private_key_hex: str, to_address: str, amount: str) -> str:
        """Transfer ``amount`` tokens to ``to_address``; return the txID.

        Raises:
            SigningError: Malformed private key.
            InvalidAddress: Bad recipient address.
            InvalidAmount / AmountOverflow: Bad amount.
            RemoteConstructionError: Node could not construct the call.
            BroadcastRejected: Node refused the signed transaction.
        """
        private_key = load_private_key(private_key_hex)
        owner = sender_address(private_key)
        recipient = address.decode(to_address)
        value = to_smallest_unit(amount, self._config.token_decimals)
        call_data = encode_transfer_call(TRANSFER_SELECTOR, recipient, value)

        owner_display = address.encode(owner)
        logger.info(
            "transfer %s tokens (%d units) %s -> %s",
            from_smallest_unit(value, self._config.token_decimals),
            value,
            owner_display,
            to_address,
        )

        unsigned = await self._builder.build(
            owner,
            self._contract,
            call_data,
            self._config.fee_limit,
        )
        signed = self._signer.sign(unsigned, private_key)
        tx_id = await self._broadcaster.submit(signed)

        logger.info("broadcast accepted: %s", tx_id)
        return tx_id

    async def handle(self, private_key_hex: str, to_address: str, amount: str) -> TransferResult:
        """Run ``send`` and fold any TransferError into a failed result."""
        try:
            tx_id = await self.send(private_key_hex, to_address, amount)
        except TransferError as exc:
            logger.warning("transfer failed [%s]: %s", exc.error_code, exc.message)
            return TransferResult(success=False, error=exc.message, error_code=exc.error_code)
        return TransferResult(success=True, tx_id=tx_id)
