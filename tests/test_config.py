"""
Tests for TransferConfig — defaults, validation, environment loading.

Test plan:
- Defaults: TronGrid, USDT mainnet, 6 decimals, keep recovery byte
- Validation: bad contract, negative decimals, fee limit, timeout
- base_url strips trailing slash, headers carry the API key
- from_env: overrides, untouched defaults, boolean parsing, bad values
"""

from __future__ import annotations

import pytest

from trc20_sender.config import (
    DEFAULT_FEE_LIMIT,
    DEFAULT_NODE_URL,
    USDT_CONTRACT_ADDRESS,
    TransferConfig,
)


class TestDefaults:
    def test_defaults(self) -> None:
        config = TransferConfig()
        assert config.node_url == DEFAULT_NODE_URL
        assert config.contract_address == USDT_CONTRACT_ADDRESS
        assert config.token_decimals == 6
        assert config.fee_limit == DEFAULT_FEE_LIMIT
        assert config.keep_recovery_byte is True
        assert config.api_key is None

    def test_frozen(self) -> None:
        config = TransferConfig()
        with pytest.raises(AttributeError):
            config.fee_limit = 5  # type: ignore[misc]

    def test_base_url_strips_slash(self) -> None:
        assert TransferConfig(node_url="https://node.test/").base_url == "https://node.test"

    def test_headers(self) -> None:
        assert TransferConfig().headers == {}
        assert TransferConfig(api_key="k").headers == {"TRON-PRO-API-KEY": "k"}


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"node_url": ""},
            {"contract_address": "not-an-address"},
            {"token_decimals": -1},
            {"fee_limit": 0},
            {"fee_limit": 2**63},
            {"timeout_s": 0},
        ],
    )
    def test_rejects(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            TransferConfig(**kwargs)


class TestFromEnv:
    def test_empty_env_gives_defaults(self) -> None:
        assert TransferConfig.from_env({}) == TransferConfig()

    def test_overrides(self) -> None:
        config = TransferConfig.from_env(
            {
                "TRC20_NODE_URL": "https://nile.trongrid.io",
                "TRC20_CONTRACT_ADDRESS": "T9yD14Nj9j7xAB4dbGeiX9h8unkKHxuWwb",
                "TRC20_TOKEN_DECIMALS": "18",
                "TRC20_FEE_LIMIT": "30000000",
                "TRC20_TIMEOUT_S": "2.5",
                "TRC20_KEEP_RECOVERY_BYTE": "no",
                "TRON_PRO_API_KEY": "abc",
            }
        )
        assert config.node_url == "https://nile.trongrid.io"
        assert config.contract_address == "T9yD14Nj9j7xAB4dbGeiX9h8unkKHxuWwb"
        assert config.token_decimals == 18
        assert config.fee_limit == 30_000_000
        assert config.timeout_s == 2.5
        assert config.keep_recovery_byte is False
        assert config.api_key == "abc"

    @pytest.mark.parametrize("value,expected", [("1", True), ("TRUE", True), (" off ", False)])
    def test_bool_values(self, value: str, expected: bool) -> None:
        config = TransferConfig.from_env({"TRC20_KEEP_RECOVERY_BYTE": value})
        assert config.keep_recovery_byte is expected

    def test_bad_bool(self) -> None:
        with pytest.raises(ValueError, match="TRC20_KEEP_RECOVERY_BYTE"):
            TransferConfig.from_env({"TRC20_KEEP_RECOVERY_BYTE": "maybe"})

    def test_bad_int(self) -> None:
        with pytest.raises(ValueError):
            TransferConfig.from_env({"TRC20_FEE_LIMIT": "lots"})

    def test_empty_api_key_ignored(self) -> None:
        assert TransferConfig.from_env({"TRON_PRO_API_KEY": ""}).api_key is None
