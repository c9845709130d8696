"""Configuration model for the geoid offset lookup."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .core.constants import BYTE_ORDER_DTYPES, EGM96_DEFAULT_BYTE_ORDER


@dataclass(slots=True)
class GridConfig:
    path: str | None = None
    resource_name: str = "EGM96.dat"
    byte_order: str = EGM96_DEFAULT_BYTE_ORDER

    def __post_init__(self):
        if self.byte_order not in BYTE_ORDER_DTYPES:
            raise ValueError(
                f"Unsupported byte_order: {self.byte_order!r}. Expected one of {sorted(BYTE_ORDER_DTYPES)}."
            )


@dataclass(slots=True)
class QueryConfig:
    clamp_latitude: bool = True


@dataclass(slots=True)
class GeoidConfig:
    grid: GridConfig = field(default_factory=GridConfig)
    query: QueryConfig = field(default_factory=QueryConfig)
    strict: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeoidConfig":
        return cls(
            grid=GridConfig(**data.get("grid", {})),
            query=QueryConfig(**data.get("query", {})),
            strict=bool(data.get("strict", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_config(path: str | Path | None) -> GeoidConfig:
    if path is None:
        return GeoidConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    if config_path.suffix.lower() != ".json":
        raise ValueError("Only JSON config files are supported")

    with config_path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError("Config root must be a JSON object")
    return GeoidConfig.from_dict(raw)
