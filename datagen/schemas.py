"""JSON schema definitions for validating run configuration files."""

from __future__ import annotations

RUN_CONFIG_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "region": {"type": "string", "enum": ["USA", "Germany", "Poland"]},
        "error_rate": {"type": "number", "minimum": 0},
        "seed": {"type": ["integer", "string"]},
        "start_index": {"type": "integer", "minimum": 1},
        "count": {"type": "integer", "minimum": 0},
        "workers": {"type": "integer", "minimum": 1},
        "provider": {"type": "string", "minLength": 1},
    },
    "additionalProperties": False,
}
