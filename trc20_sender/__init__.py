"""
TRC20 token transfers on TRON.

Public API:

    Pure layer (no I/O):
        - ``address`` — base58check codec, public key → address.
        - ``to_smallest_unit`` / ``to_padded_hex_word`` — amount encoding.
        - ``encode_transfer_call`` — ``transfer(address,uint256)`` call data.

    Secrets boundary:
        - ``load_private_key``, ``TransactionSigner``.

    Node boundary (network I/O):
        - ``TransactionBuilder`` — triggersmartcontract.
        - ``Broadcaster`` — broadcasttransaction.
        - ``NodeTransport`` / ``HttpxTransport`` — injectable transport.

    Pipeline:
        - ``TransferSender`` — key + address + amount → txID.
        - ``TransferResult`` — ``{success, txId?, error?}``.

    Configuration:
        - ``TransferConfig`` — per-deployment settings.
"""

from trc20_sender import address
from trc20_sender.abi import (
    TRANSFER_CALL_LENGTH,
    TRANSFER_SELECTOR,
    TRANSFER_SIGNATURE,
    encode_transfer_call,
    function_selector,
    transfer_parameter_hex,
)
from trc20_sender.amount import (
    UINT256_MAX,
    from_smallest_unit,
    to_padded_hex_word,
    to_smallest_unit,
)
from trc20_sender.broadcaster import Broadcaster
from trc20_sender.builder import TransactionBuilder
from trc20_sender.config import TransferConfig
from trc20_sender.errors import (
    AmountOverflow,
    BroadcastErrorCategory,
    BroadcastRejected,
    InvalidAddress,
    InvalidAmount,
    NodeTransportError,
    RemoteConstructionError,
    SigningError,
    TransferError,
    classify_broadcast_code,
)
from trc20_sender.sender import TransferResult, TransferSender
from trc20_sender.signer import (
    TransactionSigner,
    load_private_key,
    sender_address,
    verify_signature,
)
from trc20_sender.transaction import SignedTransaction, UnsignedTransaction
from trc20_sender.transport import HttpxTransport, NodeTransport

__version__ = "0.1.0"

__all__ = [
    "AmountOverflow",
    "BroadcastErrorCategory",
    "BroadcastRejected",
    "Broadcaster",
    "HttpxTransport",
    "InvalidAddress",
    "InvalidAmount",
    "NodeTransport",
    "NodeTransportError",
    "RemoteConstructionError",
    "SignedTransaction",
    "SigningError",
    "TRANSFER_CALL_LENGTH",
    "TRANSFER_SELECTOR",
    "TRANSFER_SIGNATURE",
    "TransactionBuilder",
    "TransactionSigner",
    "TransferConfig",
    "TransferError",
    "TransferResult",
    "TransferSender",
    "UINT256_MAX",
    "UnsignedTransaction",
    "address",
    "classify_broadcast_code",
    "encode_transfer_call",
    "from_smallest_unit",
    "function_selector",
    "load_private_key",
    "sender_address",
    "to_padded_hex_word",
    "to_smallest_unit",
    "transfer_parameter_hex",
    "verify_signature",
]
