"""
TRON address codec.

A TRON account address has three interchangeable forms:

    raw      21 bytes: 0x41 network prefix + 20-byte account hash
    hex      "41" + 40 lowercase hex chars (node / explorer form)
    display  base58check(raw), 34 chars starting with "T"

base58check appends the first 4 bytes of sha256(sha256(raw)) before
base58 encoding; decoding verifies that checksum. The account hash is
the last 20 bytes of keccak-256 over the 64-byte uncompressed public
key, same as Ethereum, with the TRON prefix byte in front.
"""

from __future__ import annotations

import base58
from eth_utils import keccak

from trc20_sender.errors import InvalidAddress

# Mainnet (and Nile/Shasta testnet) address prefix byte.
ADDRESS_PREFIX = 0x41

# Raw address length: prefix byte + 20-byte account hash.
RAW_ADDRESS_LENGTH = 21

_ACCOUNT_HASH_LENGTH = 20


def decode(display: str) -> bytes:
    """Decode a base58check display address into its 21 raw bytes.

    Raises:
        InvalidAddress: If the string is not base58, the checksum does not
            verify, or the payload is not a 21-byte 0x41-prefixed address.
    """
    if not isinstance(display, str) or not display:
        raise InvalidAddress("address must be a non-empty string")
    # b58decode_check strips surrounding whitespace, which would not round-trip.
    if display != display.strip():
        raise InvalidAddress(
            f"invalid address {display!r}: surrounding whitespace",
            details={"address": display},
        )
    try:
        raw = base58.b58decode_check(display)
    except ValueError as exc:
        raise InvalidAddress(
            f"invalid address {display!r}: {exc}",
            details={"address": display},
        ) from exc
    _check_raw(raw)
    return raw


def encode(raw: bytes) -> str:
    """Encode 21 raw address bytes as a base58check display address.

    Raises:
        InvalidAddress: If ``raw`` is not a 21-byte 0x41-prefixed address.
    """
    _check_raw(raw)
    return base58.b58encode_check(bytes(raw)).decode("ascii")


def from_public_key(public_key: bytes) -> bytes:
    """Derive the raw address for an uncompressed secp256k1 public key.

    Accepts the 64-byte ``x || y`` form or the 65-byte SEC1 form with
    the leading 0x04 marker.
    """
    if len(public_key) == 65 and public_key[0] == 0x04:
        public_key = public_key[1:]
    if len(public_key) != 64:
        raise InvalidAddress(
            f"public key must be 64 bytes uncompressed, got {len(public_key)}"
        )
    return bytes([ADDRESS_PREFIX]) + keccak(public_key)[-_ACCOUNT_HASH_LENGTH:]


def account_hash(raw: bytes) -> bytes:
    """Return the 20-byte account hash of a raw address (prefix dropped)."""
    _check_raw(raw)
    return bytes(raw[1:])


def to_hex(raw: bytes) -> str:
    """Raw bytes → ``41...`` hex form."""
    _check_raw(raw)
    return bytes(raw).hex()


def from_hex(value: str) -> bytes:
    """``41...`` hex form (optionally ``0x``-prefixed) → raw bytes."""
    text = value[2:] if value.lower().startswith("0x") else value
    try:
        raw = bytes.fromhex(text)
    except ValueError as exc:
        raise InvalidAddress(f"invalid hex address {value!r}") from exc
    _check_raw(raw)
    return raw


def is_valid(display: str) -> bool:
    """True if ``display`` decodes to a well-formed TRON address."""
    try:
        decode(display)
    except InvalidAddress:
        return False
    return True


def _check_raw(raw: bytes) -> None:
    if len(raw) != RAW_ADDRESS_LENGTH:
        raise InvalidAddress(
            f"raw address must be {RAW_ADDRESS_LENGTH} bytes, got {len(raw)}",
            details={"length": len(raw)},
        )
    if raw[0] != ADDRESS_PREFIX:
        raise InvalidAddress(
            f"raw address must start with 0x{ADDRESS_PREFIX:02x}, got 0x{raw[0]:02x}",
            details={"prefix": raw[0]},
        )
