"""
TRC20 ``transfer(address,uint256)`` call encoding.

Call data layout (68 bytes):

    selector   4 bytes   keccak256("transfer(address,uint256)")[:4]
    to         32 bytes  recipient account hash, left-zero-padded
    value      32 bytes  amount in smallest units, big-endian uint256

The ABI ``address`` type is 160 bits, so the address word carries the
20-byte account hash; the 0x41 network byte is not part of it.
"""

from __future__ import annotations

from eth_abi import encode as abi_encode
from eth_utils import keccak

from trc20_sender import address
from trc20_sender.amount import to_word

TRANSFER_SIGNATURE = "transfer(address,uint256)"

SELECTOR_LENGTH = 4

WORD_LENGTH = 32

TRANSFER_CALL_LENGTH = SELECTOR_LENGTH + 2 * WORD_LENGTH


def function_selector(signature: str) -> bytes:
    """First 4 bytes of keccak-256 over a canonical function signature."""
    return keccak(text=signature)[:SELECTOR_LENGTH]


TRANSFER_SELECTOR = function_selector(TRANSFER_SIGNATURE)


def address_word(recipient: bytes) -> bytes:
    """ABI word for a raw 21-byte TRON address."""
    account = address.account_hash(recipient)
    return abi_encode(["address"], [account])


def encode_transfer_call(
    selector: bytes,
    recipient: bytes,
    amount: int,
) -> bytes:
    """Build the full 68-byte call data for a transfer.

    Args:
        selector: 4-byte function selector (normally TRANSFER_SELECTOR).
        recipient: Raw 21-byte recipient address.
        amount: Amount in smallest token units.

    Raises:
        ValueError: If the selector is not 4 bytes.
        InvalidAddress: If the recipient is not a raw TRON address.
        InvalidAmount / AmountOverflow: If the amount is not a uint256.
    """
    if len(selector) != SELECTOR_LENGTH:
        raise ValueError(f"selector must be {SELECTOR_LENGTH} bytes, got {len(selector)}")
    return bytes(selector) + address_word(recipient) + to_word(amount)


def transfer_parameter_hex(recipient: bytes, amount: int) -> str:
    """Hex of the encoded arguments only, without the selector.

    This is the ``parameter`` field of ``triggersmartcontract``; the node
    derives the selector from ``function_selector`` on its own.
    """
    call_data = encode_transfer_call(TRANSFER_SELECTOR, recipient, amount)
    return call_data[SELECTOR_LENGTH:].hex()
