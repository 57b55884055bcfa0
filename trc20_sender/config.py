"""
Deployment configuration for the transfer pipeline.

Node endpoint, token contract, precision, fee ceiling, timeout and
signature policy live in one frozen ``TransferConfig`` passed into the
pipeline at construction time. Tests build their own config pointing at
a fake node.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from trc20_sender import address

# USDT on TRON mainnet.
USDT_CONTRACT_ADDRESS = "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"

DEFAULT_NODE_URL = "https://api.trongrid.io"

# 1 TRX, in sun.
DEFAULT_FEE_LIMIT = 1_000_000

DEFAULT_TOKEN_DECIMALS = 6

DEFAULT_TIMEOUT_S = 30.0

# fee_limit is an int64 on the node side.
_MAX_FEE_LIMIT = 2**63 - 1

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class TransferConfig:
    """Per-deployment settings.

    Attributes:
        node_url: Base URL of a TronGrid-compatible HTTP API.
        contract_address: Display address of the TRC20 token contract.
        token_decimals: Token precision (USDT: 6).
        fee_limit: Energy fee ceiling in sun.
        timeout_s: Timeout for each node request, in seconds.
        keep_recovery_byte: Send the 65-byte r||s||v signature. When False
            the recovery byte is stripped and 64 bytes are sent.
        api_key: Optional TronGrid API key (``TRON-PRO-API-KEY`` header).
    """

    node_url: str = DEFAULT_NODE_URL
    contract_address: str = USDT_CONTRACT_ADDRESS
    token_decimals: int = DEFAULT_TOKEN_DECIMALS
    fee_limit: int = DEFAULT_FEE_LIMIT
    timeout_s: float = DEFAULT_TIMEOUT_S
    keep_recovery_byte: bool = True
    api_key: str | None = None

    def __post_init__(self) -> None:
        if not self.node_url:
            raise ValueError("node_url must be non-empty")
        if not address.is_valid(self.contract_address):
            raise ValueError(f"contract_address is not a TRON address: {self.contract_address!r}")
        if self.token_decimals < 0:
            raise ValueError(f"token_decimals must be >= 0, got {self.token_decimals}")
        if not 0 < self.fee_limit <= _MAX_FEE_LIMIT:
            raise ValueError(f"fee_limit must be a positive int64, got {self.fee_limit}")
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be > 0, got {self.timeout_s}")

    @property
    def base_url(self) -> str:
        """node_url without a trailing slash."""
        return self.node_url.rstrip("/")

    @property
    def headers(self) -> dict[str, str]:
        """Extra request headers for the node."""
        if self.api_key:
            return {"TRON-PRO-API-KEY": self.api_key}
        return {}

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> TransferConfig:
        """Build a config from ``TRC20_*`` environment variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}
        if "TRC20_NODE_URL" in env:
            kwargs["node_url"] = env["TRC20_NODE_URL"]
        if "TRC20_CONTRACT_ADDRESS" in env:
            kwargs["contract_address"] = env["TRC20_CONTRACT_ADDRESS"]
        if "TRC20_TOKEN_DECIMALS" in env:
            kwargs["token_decimals"] = int(env["TRC20_TOKEN_DECIMALS"])
        if "TRC20_FEE_LIMIT" in env:
            kwargs["fee_limit"] = int(env["TRC20_FEE_LIMIT"])
        if "TRC20_TIMEOUT_S" in env:
            kwargs["timeout_s"] = float(env["TRC20_TIMEOUT_S"])
        if "TRC20_KEEP_RECOVERY_BYTE" in env:
            kwargs["keep_recovery_byte"] = _parse_bool(
                "TRC20_KEEP_RECOVERY_BYTE", env["TRC20_KEEP_RECOVERY_BYTE"]
            )
        if env.get("TRON_PRO_API_KEY"):
            kwargs["api_key"] = env["TRON_PRO_API_KEY"]
        return cls(**kwargs)  # type: ignore[arg-type]


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")
