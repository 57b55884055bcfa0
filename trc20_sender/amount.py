"""
Token amount encoding.

Human amounts ("10.5") are parsed with ``decimal.Decimal``, never
float, then scaled by the token precision and truncated to an integer
number of smallest units. The integer is then written as one ABI
``uint256`` word.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext

from eth_abi import encode as abi_encode

from trc20_sender.errors import AmountOverflow, InvalidAmount

UINT256_MAX = 2**256 - 1

# Enough digits for any uint256 value plus a generous fractional part.
_PRECISION = 120

_UINT256_DIGITS = 78


def to_smallest_unit(text: str, decimals: int) -> int:
    """Convert a decimal amount string to integer smallest units.

    Digits beyond ``decimals`` are truncated, not rounded.

    Raises:
        InvalidAmount: If the string is not a finite, non-negative decimal,
            or ``decimals`` is negative.
    """
    if decimals < 0:
        raise InvalidAmount(f"decimals must be >= 0, got {decimals}")
    if not isinstance(text, str):
        raise InvalidAmount(f"amount must be a string, got {type(text).__name__}")
    try:
        value = Decimal(text.strip())
    except InvalidOperation as exc:
        raise InvalidAmount(
            f"amount is not a decimal number: {text!r}",
            details={"amount": text},
        ) from exc
    if not value.is_finite():
        raise InvalidAmount(f"amount must be finite: {text!r}", details={"amount": text})
    if value < 0:
        raise InvalidAmount(f"amount must be non-negative: {text!r}", details={"amount": text})
    # 10**78 > UINT256_MAX; also keeps scaleb inside the context exponent range.
    if value and value.adjusted() + decimals >= _UINT256_DIGITS:
        raise AmountOverflow(
            f"amount does not fit in uint256: {text!r}",
            details={"amount": text},
        )

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        scaled = value.scaleb(decimals)
    return int(scaled)


def from_smallest_unit(value: int, decimals: int) -> Decimal:
    """Inverse of ``to_smallest_unit`` for display purposes."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(value).scaleb(-decimals)


def to_padded_hex_word(value: int) -> str:
    """Encode a non-negative integer as a 64-char big-endian hex word.

    Raises:
        InvalidAmount: If ``value`` is negative.
        AmountOverflow: If ``value`` exceeds 2**256 - 1.
    """
    return to_word(value).hex()


def to_word(value: int) -> bytes:
    """Same as ``to_padded_hex_word`` but returns the 32 raw bytes."""
    if value < 0:
        raise InvalidAmount(f"amount must be non-negative, got {value}")
    if value > UINT256_MAX:
        raise AmountOverflow(
            "amount does not fit in uint256",
            details={"bits": value.bit_length()},
        )
    return abi_encode(["uint256"], [value])
