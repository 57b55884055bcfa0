"""JSON schemas for the TRON node responses this package reads."""

from __future__ import annotations

from typing import Any, Dict

import jsonschema  # type: ignore[import-untyped]

_HEX_64 = {"type": "string", "pattern": "^[0-9a-fA-F]{64}$"}

# /wallet/triggersmartcontract, the part read after the error checks.
TRIGGER_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["transaction"],
    "properties": {
        "result": {
            "type": "object",
            "properties": {
                "result": {"type": "boolean"},
                "code": {"type": "string"},
                "message": {"type": "string"},
            },
        },
        "transaction": {
            "type": "object",
            "required": ["txID", "raw_data", "raw_data_hex"],
            "properties": {
                "txID": _HEX_64,
                "raw_data": {
                    "type": "object",
                    "required": ["contract", "ref_block_bytes", "ref_block_hash", "expiration"],
                },
                "raw_data_hex": {
                    "type": "string",
                    "minLength": 2,
                    "pattern": "^([0-9a-fA-F]{2})+$",
                },
            },
        },
    },
}

# /wallet/broadcasttransaction
BROADCAST_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "result": {"type": "boolean"},
        "txid": {"type": "string"},
        "code": {"type": "string"},
        "message": {"type": "string"},
    },
}


def schema_errors(instance: Dict[str, Any], schema: Dict[str, Any]) -> list[str]:
    """All validation messages for ``instance``, empty when it conforms."""
    validator_cls = jsonschema.validators.validator_for(schema)
    validator = validator_cls(schema)
    return [
        _format_error(error)
        for error in sorted(validator.iter_errors(instance), key=lambda e: [str(part) for part in e.path])
    ]


def _format_error(error: jsonschema.ValidationError) -> str:
    location = "/".join(str(part) for part in error.absolute_path)
    return f"{location or '<root>'}: {error.message}"
