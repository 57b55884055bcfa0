"""
Transaction signer. This is the only module that handles private keys.

Signs the sha256 digest of the node's canonical ``raw_data`` bytes with
secp256k1 ECDSA (RFC 6979 deterministic nonces, low-s) via eth_keys.
The signature is r || s || v, 65 bytes; deployments that must not send
the recovery byte set ``keep_recovery_byte=False`` and get 64 bytes.

The digest is taken over ``raw_data_hex`` as returned by the node, not
over a local JSON re-serialization of ``raw_data``: the node hashes its
protobuf encoding, and only those exact bytes produce the txID it will
check the signature against.

Private keys are never logged and never leave this module except as
the opaque ``PrivateKey`` object the caller passed in.
"""

from __future__ import annotations

import logging

from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError

from trc20_sender import address
from trc20_sender.errors import SigningError
from trc20_sender.transaction import SignedTransaction, UnsignedTransaction

logger = logging.getLogger(__name__)

PRIVATE_KEY_HEX_LENGTH = 64

SIGNATURE_LENGTH = 65

COMPACT_SIGNATURE_LENGTH = 64

# Order of the secp256k1 group.
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


def load_private_key(private_key_hex: str) -> keys.PrivateKey:
    """Parse a hex private key, with or without ``0x``.

    Raises:
        SigningError: If the string is not 64 hex chars or is not a valid
            secp256k1 scalar (0 < k < n).
    """
    if not isinstance(private_key_hex, str):
        raise SigningError("private key must be a hex string")
    text = private_key_hex.strip()
    if text[:2].lower() == "0x":
        text = text[2:]
    if len(text) != PRIVATE_KEY_HEX_LENGTH:
        raise SigningError(
            f"private key must be {PRIVATE_KEY_HEX_LENGTH} hex chars, got {len(text)}"
        )
    try:
        key_bytes = bytes.fromhex(text)
    except ValueError as exc:
        raise SigningError("private key is not valid hex") from exc

    scalar = int.from_bytes(key_bytes, "big")
    if not 0 < scalar < SECP256K1_N:
        raise SigningError("private key is out of range for secp256k1")
    try:
        return keys.PrivateKey(key_bytes)
    except ValidationError as exc:
        raise SigningError(f"invalid private key: {exc}") from exc


def sender_address(private_key: keys.PrivateKey) -> bytes:
    """Raw TRON address owned by ``private_key``."""
    return address.from_public_key(private_key.public_key.to_bytes())


def verify_signature(digest: bytes, signature: bytes, public_key: keys.PublicKey) -> bool:
    """Check an r||s or r||s||v signature over ``digest``."""
    if len(signature) == COMPACT_SIGNATURE_LENGTH:
        candidates = [signature + bytes([v]) for v in (0, 1)]
    elif len(signature) == SIGNATURE_LENGTH:
        v = signature[64]
        candidates = [signature[:64] + bytes([v - 27 if v >= 27 else v])]
    else:
        return False

    for candidate in candidates:
        try:
            sig = keys.Signature(candidate)
        except (BadSignature, ValidationError):
            continue
        if public_key.verify_msg_hash(digest, sig):
            return True
    return False


class TransactionSigner:
    """Signs node-constructed transactions.

    Args:
        keep_recovery_byte: Keep the trailing v byte (65-byte signature).
            False strips it to 64 bytes.
    """

    def __init__(self, keep_recovery_byte: bool = True) -> None:
        self._keep_recovery_byte = keep_recovery_byte

    @property
    def keep_recovery_byte(self) -> bool:
        return self._keep_recovery_byte

    def sign(self, tx: UnsignedTransaction, private_key: keys.PrivateKey) -> SignedTransaction:
        """Sign ``tx`` with ``private_key``.

        Raises:
            SigningError: If the digest does not match the transaction id,
                or the produced signature fails verification.
        """
        if not isinstance(private_key, keys.PrivateKey):
            raise SigningError("private key must be loaded with load_private_key()")

        digest = tx.digest()
        if digest.hex() != tx.tx_id:
            raise SigningError(
                "raw_data digest does not match txID",
                details={"txID": tx.tx_id, "digest": digest.hex()},
            )

        try:
            signature = private_key.sign_msg_hash(digest).to_bytes()
        except ValidationError as exc:
            raise SigningError(f"signing failed: {exc}") from exc

        if not verify_signature(digest, signature, private_key.public_key):
            raise SigningError("produced signature does not verify")

        if not self._keep_recovery_byte:
            signature = signature[:COMPACT_SIGNATURE_LENGTH]

        logger.debug("signed transaction %s (%d-byte signature)", tx.tx_id, len(signature))
        return SignedTransaction(transaction=tx, signature=signature)
