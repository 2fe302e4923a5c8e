"""Run configuration loaded from YAML files."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Union

import yaml
from jsonschema import ValidationError, validate

from .schemas import RUN_CONFIG_SCHEMA


class ConfigError(ValueError):
    """Raised when a run configuration file is malformed."""


@dataclass(slots=True)
class RunConfig:
    """Parameters of one reproducible generation run."""

    region: str = "USA"
    error_rate: float = 0.0
    seed: Union[int, str] = 42
    start_index: int = 1
    count: int = 20
    workers: int = 1
    provider: str = "faker"

    def merged(self, **overrides: Any) -> "RunConfig":
        """Return a copy with every non-``None`` override applied."""

        known = {item.name for item in fields(self)}
        updates = {key: value for key, value in overrides.items() if key in known and value is not None}
        return replace(self, **updates)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_run_config(path: Path) -> RunConfig:
    """Load and validate a YAML run configuration."""

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Run configuration must be a mapping")
    try:
        validate(instance=data, schema=RUN_CONFIG_SCHEMA)
    except ValidationError as exc:
        location = ".".join(str(part) for part in exc.absolute_path) or "<root>"
        raise ConfigError(f"Invalid run configuration at {location}: {exc.message}") from exc

    return RunConfig().merged(**data)
