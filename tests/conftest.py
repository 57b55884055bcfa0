"""Shared fixtures: canned TRON node replies and a fake transport."""

from __future__ import annotations

import hashlib
from typing import Any, Callable

import pytest

from trc20_sender.errors import NodeTransportError
from trc20_sender.transaction import UnsignedTransaction

CONTRACT = "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"

# Stand-in for the node's protobuf encoding; only its bytes matter here.
RAW_DATA_HEX = (
    "0a028a2f22085d3d27a1e3bb7c5540e0a0a7b4bb315aae01081f12a9010a31747970652e"
    "676f6f676c65617069732e636f6d2f70726f746f636f6c2e54726967676572536d617274"
    "436f6e747261637412740a15410000000000000000000000000000000000000000121541"
    "a614f803b6fd780986a42c78ec9c7f77e6ded13c2244a9059cbb70e0a0a7b4bb31"
    "900180ade204"
)
TX_ID = hashlib.sha256(bytes.fromhex(RAW_DATA_HEX)).hexdigest()


def make_raw_data() -> dict[str, Any]:
    return {
        "contract": [
            {
                "parameter": {
                    "value": {
                        "data": "a9059cbb" + "00" * 64,
                        "owner_address": "TAUN6FwrnwwmaEqYcckffC7wYmbaS6cBiX",
                        "contract_address": CONTRACT,
                    },
                    "type_url": "type.googleapis.com/protocol.TriggerSmartContract",
                },
                "type": "TriggerSmartContract",
            }
        ],
        "ref_block_bytes": "8a2f",
        "ref_block_hash": "5d3d27a1e3bb7c55",
        "expiration": 1700000060000,
        "fee_limit": 1000000,
        "timestamp": 1700000000000,
    }


def make_trigger_response(**transaction_overrides: Any) -> dict[str, Any]:
    transaction: dict[str, Any] = {
        "visible": True,
        "txID": TX_ID,
        "raw_data": make_raw_data(),
        "raw_data_hex": RAW_DATA_HEX,
    }
    transaction.update(transaction_overrides)
    return {
        "result": {"result": True},
        "energy_used": 14650,
        "constant_result": ["0" * 64],
        "transaction": transaction,
    }


class FakeTransport:
    """Returns canned responses keyed by URL path suffix."""

    def __init__(
        self,
        responses: dict[str, dict[str, Any]] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self._responses = responses or {}
        self._errors = errors or {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((url, payload))
        for suffix, exc in self._errors.items():
            if url.endswith(suffix):
                raise exc
        for suffix, response in self._responses.items():
            if url.endswith(suffix):
                return response
        raise AssertionError(f"unexpected request to {url}")

    def paths(self) -> list[str]:
        return [url.rsplit("/", 1)[-1] for url, _ in self.calls]


@pytest.fixture
def unsigned_tx() -> UnsignedTransaction:
    return UnsignedTransaction(tx_id=TX_ID, raw_data=make_raw_data(), raw_data_hex=RAW_DATA_HEX)


@pytest.fixture
def trigger_response() -> Callable[..., dict[str, Any]]:
    return make_trigger_response


@pytest.fixture
def fake_transport() -> Callable[..., FakeTransport]:
    return FakeTransport


@pytest.fixture
def timeout_error() -> NodeTransportError:
    return NodeTransportError(
        "request timed out after 30.0s",
        error_code="TIMEOUT",
        details={"timeout_s": 30.0},
    )
