"""
Transaction value types passed between builder, signer and broadcaster.

An ``UnsignedTransaction`` is exactly what the node returned from
``triggersmartcontract``: its ``raw_data`` dict is kept in received key
order and never rebuilt locally, and ``raw_data_hex`` is the node's own
protobuf serialization of it. Those bytes get hashed and signed.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UnsignedTransaction:
    """Node-constructed transaction body, before signing.

    Attributes:
        tx_id: sha256 of the raw_data bytes, 64 lowercase hex chars.
        raw_data: Decoded ``raw_data`` object, preserved verbatim.
        raw_data_hex: Node's canonical serialization of raw_data.
    """

    tx_id: str
    raw_data: dict[str, Any]
    raw_data_hex: str

    @property
    def raw_data_bytes(self) -> bytes:
        return bytes.fromhex(self.raw_data_hex)

    def digest(self) -> bytes:
        """The 32-byte hash that gets signed (equals bytes.fromhex(tx_id))."""
        return hashlib.sha256(self.raw_data_bytes).digest()


@dataclass(frozen=True)
class SignedTransaction:
    """An unsigned transaction plus its single owner signature.

    Attributes:
        transaction: The node-constructed body.
        signature: 65 bytes (r || s || v) or 64 bytes (r || s) when the
            recovery byte was stripped.
    """

    transaction: UnsignedTransaction
    signature: bytes

    @property
    def tx_id(self) -> str:
        return self.transaction.tx_id

    @property
    def signature_hex(self) -> str:
        return self.signature.hex()

    def to_broadcast_body(self) -> dict[str, Any]:
        """Request body for ``/wallet/broadcasttransaction``."""
        return {
            "txID": self.transaction.tx_id,
            "raw_data": self.transaction.raw_data,
            "raw_data_hex": self.transaction.raw_data_hex,
            "signature": [self.signature_hex],
            "visible": True,
        }
