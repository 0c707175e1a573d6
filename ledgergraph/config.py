"""
Settings for ledgergraph runs.

Sources, later ones win:
- optional YAML file (for example `ledgergraph.yaml`),
- environment variables `LEDGERGRAPH_<FIELD>`, e.g. `LEDGERGRAPH_ACCOUNT`,
- explicit overrides, usually from command line flags (None is ignored).
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from .base import LedgerGraphError

ENV_PREFIX = "LEDGERGRAPH_"
IMAGE_SUFFIXES = (".png", ".pdf", ".svg", ".jpg", ".jpeg")


class Settings(BaseModel):
    """Which account to chart and how to draw it."""

    model_config = ConfigDict(extra="forbid")

    account: str = "Income:Amazon"
    output: str = "balance.png"
    width: int = 1920
    height: int = 1080
    dpi: int = 100
    cumulative: bool = False
    log_level: str = "INFO"

    @field_validator("account", "output")
    @classmethod
    def not_empty(cls, v, info):
        if not v:
            raise ValueError(f"Setting must not be empty: {info.field_name}")
        return v

    @field_validator("output")
    @classmethod
    def image_suffix(cls, v):
        if Path(v).suffix.lower() not in IMAGE_SUFFIXES:
            raise ValueError(f"Output must end with one of {', '.join(IMAGE_SUFFIXES)}: {v}")
        return v

    @field_validator("width", "height", "dpi")
    @classmethod
    def positive(cls, v, info):
        if v <= 0:
            raise ValueError(f"Setting must be positive: {info.field_name}")
        return v

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v):
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return v


def from_environment(environ=os.environ) -> Dict[str, Any]:
    """Collect `LEDGERGRAPH_*` variables that name a setting."""
    values = {}
    for name in Settings.model_fields:
        key = ENV_PREFIX + name.upper()
        if key in environ:
            values[name] = environ[key]
    return values


def load_settings(path: Optional[str | Path] = None, environ=os.environ, **overrides) -> Settings:
    """Load YAML file (if any), apply environment and overrides, return Settings."""
    config: Dict[str, Any] = {}
    if path is not None:
        if not Path(path).exists():
            raise LedgerGraphError(f"Config file not found: {path}")
        with open(path, "r") as f:
            config = yaml.safe_load(f) or {}
        if not isinstance(config, dict):
            raise LedgerGraphError(f"Config file must contain a mapping: {path}")
    config.update(from_environment(environ))
    config.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**config)
