"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

import yaml

from roadquery_core.querystring.codec import CodecConfig

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Config")


@dataclass
class Config:
    """Router configuration."""

    # Querystring codec
    codec: str = "bracket"
    array_delimiter: str = "|"
    encoding: str = "utf-8"

    # Matching
    strip_leading_slash: bool = True

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Create config from dictionary."""
        # Filter to only valid fields
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def from_json(cls: Type[T], path: str) -> T:
        """Load config from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls: Type[T], path: str) -> T:
        """Load config from YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_env(cls: Type[T], prefix: str = "ROADQUERY_") -> T:
        """Load config from environment variables."""
        return cls.from_dict(_env_values(prefix))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {}
        for field_name in self.__dataclass_fields__:
            result[field_name] = getattr(self, field_name)
        return result

    def merge(self, other: Dict[str, Any]) -> "Config":
        """Merge with explicitly set values (other takes precedence)."""
        data = self.to_dict()
        data.update(other)
        return Config.from_dict(data)

    def codec_config(self) -> CodecConfig:
        """Codec settings carried by this config."""
        return CodecConfig(
            array_delimiter=self.array_delimiter,
            encoding=self.encoding,
        )


def _env_values(prefix: str) -> Dict[str, Any]:
    data: Dict[str, Any] = {}

    for key, value in os.environ.items():
        if key.startswith(prefix):
            config_key = key[len(prefix):].lower()

            # Type conversion
            if value.lower() in ("true", "false"):
                data[config_key] = value.lower() == "true"
            else:
                data[config_key] = value

    return data


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "ROADQUERY_",
) -> Config:
    """Load configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (if provided)
    3. Defaults
    """
    config = Config()

    # Load from file if provided
    if path:
        path_obj = Path(path)
        if path_obj.exists():
            if path.endswith(".json"):
                config = Config.from_json(path)
            elif path.endswith((".yaml", ".yml")):
                config = Config.from_yaml(path)
            else:
                logger.warning(f"Unknown config format: {path}")

    # Override with environment variables that are set
    return config.merge(_env_values(env_prefix))


__all__ = [
    "Config",
    "load_config",
]
