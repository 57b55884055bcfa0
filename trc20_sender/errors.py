"""
Error taxonomy for TRC20 transfers, plus TRON node result mapping.

Every failure a caller can see is a ``TransferError`` subclass with a
machine-readable ``error_code`` and a ``details`` dict for diagnostics.
All of them are terminal: nothing in this package retries, because a
repeated broadcast can double-submit a transfer.

``NodeTransportError`` is the transport-level failure (timeout, refused
connection, bad status, non-JSON body). It never reaches the caller
directly: the builder and broadcaster re-raise it as their own stage
error with the original chained as ``__cause__``.

TRON broadcast return codes (java-tron ``Return.response_code``):
    - SIGERROR: signature does not match the owner address
    - CONTRACT_VALIDATE_ERROR: contract-level validation failed
    - CONTRACT_EXE_ERROR: contract execution failed
    - BANDWITH_ERROR: not enough bandwidth or energy (sic, node spelling)
    - DUP_TRANSACTION_ERROR: the transaction was already broadcast
    - TAPOS_ERROR: reference block is gone from the node's window
    - TRANSACTION_EXPIRATION_ERROR: expiration passed before broadcast
    - SERVER_BUSY, NO_CONNECTION, NOT_ENOUGH_EFFECTIVE_CONNECTION: node side
"""

from __future__ import annotations

import string
from enum import StrEnum
from typing import Any


class TransferError(Exception):
    """Base class for every terminal transfer failure."""

    error_code = "TRANSFER_ERROR"

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        self.details: dict[str, Any] = details or {}


class InvalidAddress(TransferError):
    """A display or raw address failed decoding or checksum verification."""

    error_code = "INVALID_ADDRESS"


class InvalidAmount(TransferError):
    """An amount was unparsable, negative, or not finite."""

    error_code = "INVALID_AMOUNT"


class AmountOverflow(InvalidAmount):
    """An amount does not fit in a uint256 word."""

    error_code = "AMOUNT_OVERFLOW"


class SigningError(TransferError):
    """The private key is malformed or signing failed."""

    error_code = "SIGNING_ERROR"


class RemoteConstructionError(TransferError):
    """The node refused to construct the transaction, or was unreachable."""

    error_code = "CONSTRUCTION_FAILED"


class BroadcastRejected(TransferError):
    """The node rejected the signed transaction, or was unreachable."""

    error_code = "BROADCAST_REJECTED"


class NodeTransportError(Exception):
    """Transport-level failure talking to the TRON node."""

    def __init__(
        self,
        message: str,
        *,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.details: dict[str, Any] = details or {}


# ---------------------------------------------------------------------------
# Broadcast return code → category
# ---------------------------------------------------------------------------


class BroadcastErrorCategory(StrEnum):
    """Coarse categories for rejected broadcasts."""

    SIGNATURE = "SIGNATURE"
    VALIDATION = "VALIDATION"
    RESOURCES = "RESOURCES"
    DUPLICATE = "DUPLICATE"
    EXPIRED = "EXPIRED"
    NODE_UNAVAILABLE = "NODE_UNAVAILABLE"
    UNKNOWN = "UNKNOWN"


_CODE_MAP: dict[str, BroadcastErrorCategory] = {
    "SIGERROR": BroadcastErrorCategory.SIGNATURE,
    "CONTRACT_VALIDATE_ERROR": BroadcastErrorCategory.VALIDATION,
    "CONTRACT_EXE_ERROR": BroadcastErrorCategory.VALIDATION,
    "BANDWITH_ERROR": BroadcastErrorCategory.RESOURCES,
    "DUP_TRANSACTION_ERROR": BroadcastErrorCategory.DUPLICATE,
    "TAPOS_ERROR": BroadcastErrorCategory.EXPIRED,
    "TRANSACTION_EXPIRATION_ERROR": BroadcastErrorCategory.EXPIRED,
    "TOO_BIG_TRANSACTION_ERROR": BroadcastErrorCategory.VALIDATION,
    "SERVER_BUSY": BroadcastErrorCategory.NODE_UNAVAILABLE,
    "NO_CONNECTION": BroadcastErrorCategory.NODE_UNAVAILABLE,
    "NOT_ENOUGH_EFFECTIVE_CONNECTION": BroadcastErrorCategory.NODE_UNAVAILABLE,
    "BLOCK_UNSOLIDIFIED": BroadcastErrorCategory.NODE_UNAVAILABLE,
}


def classify_broadcast_code(code: str | None) -> BroadcastErrorCategory:
    """Map a node broadcast return code to a BroadcastErrorCategory.

    Args:
        code: The ``code`` field of a broadcast response (e.g.
            "SIGERROR"). None when the node sent no code.

    Returns:
        The matching category, or UNKNOWN for unrecognized or missing codes.
    """
    if code is None:
        return BroadcastErrorCategory.UNKNOWN
    return _CODE_MAP.get(code, BroadcastErrorCategory.UNKNOWN)


# ---------------------------------------------------------------------------
# Node message decoding
# ---------------------------------------------------------------------------

_HEX_DIGITS = frozenset(string.hexdigits)

# Hex-only strings shorter than this ("4f4b", "cafe") stay as they are.
_MIN_HEX_MESSAGE_LENGTH = 8


def decode_node_message(message: object) -> str | None:
    """Return a node message as readable text.

    TronGrid hex-encodes the ``message`` of failed broadcasts and
    construction results (``"7369676e6174757265..."``); only those
    fields go through here. Plain-text messages, and hex strings shorter
    than four bytes, are returned unchanged.
    """
    if message is None:
        return None
    text = str(message)
    if (
        len(text) >= _MIN_HEX_MESSAGE_LENGTH
        and len(text) % 2 == 0
        and all(c in _HEX_DIGITS for c in text)
    ):
        try:
            decoded = bytes.fromhex(text).decode("utf-8")
        except UnicodeDecodeError:
            return text
        if decoded.isprintable():
            return decoded
    return text
