"""Store configuration, optionally loaded from YAML."""

from dataclasses import dataclass
from pathlib import Path

import yaml

_FIELD_TYPES = {
    "window_seconds": int,
    "thread_safe": bool,
    "name": str,
}


@dataclass(frozen=True)
class StoreConfig:
    window_seconds: int = 300
    thread_safe: bool = True
    name: str = "default"


def load_config(path: str | Path) -> StoreConfig:
    """Parse a YAML file into a StoreConfig.

    Accepts either a flat mapping or one nested under a top-level
    ``store:`` key.  Unknown keys are rejected so typos don't silently
    fall back to defaults.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        definition = yaml.safe_load(f) or {}

    if not isinstance(definition, dict):
        raise ValueError(f"{path.name}: top level must be a mapping")
    if "store" in definition:
        definition = definition["store"] or {}
        if not isinstance(definition, dict):
            raise ValueError(f"{path.name}: 'store' must be a mapping")

    for field, value in definition.items():
        if field not in _FIELD_TYPES:
            raise ValueError(f"{path.name}: unknown field '{field}'")
        expected = _FIELD_TYPES[field]
        # bool is an int subclass; window_seconds: true is a typo, not 1.
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ValueError(
                f"{path.name}: field '{field}' must be {expected.__name__}, "
                f"got {type(value).__name__}"
            )

    return StoreConfig(**definition)
