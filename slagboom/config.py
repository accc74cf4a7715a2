"""Slagboom configuration."""

import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

import pydantic


class ConfigurationError(Exception):
    """Configuration Error."""


class ServerConfig(pydantic.BaseModel):
    """Server config"""

    host: str = "localhost"
    port: int = 8001
    ssl_key: Optional[Path] = None
    ssl_cert: Optional[Path] = None


class GateConfig(pydantic.BaseModel):
    """Basic authentication gate config.

    ``exempt`` takes a single path or a list of paths; either way it ends up
    as a frozenset of exact paths.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    realm: str = "Application"
    exempt: frozenset[str] = frozenset()

    @pydantic.field_validator("exempt", mode="before")
    @classmethod
    def normalize_exempt(cls, value):
        if value is None:
            return frozenset()
        if isinstance(value, str):
            return frozenset([value])
        if isinstance(value, Iterable):
            return frozenset(value)
        return value


class MainConfig(pydantic.BaseModel):
    """Main config"""

    instance: Path = Path(".")
    server: ServerConfig = pydantic.Field(default_factory=ServerConfig)
    gate: GateConfig = pydantic.Field(default_factory=GateConfig)
    # username = password
    accounts: dict[str, str] = pydantic.Field(default_factory=dict)

    @classmethod
    def from_file(cls, cfg_file: Path) -> "MainConfig":
        """Load config from toml file."""
        try:
            data = tomllib.loads(cfg_file.read_text(encoding="utf-8"))
            obj = cls.model_validate(data)
        except (OSError, tomllib.TOMLDecodeError, pydantic.ValidationError) as e:
            raise ConfigurationError(f"Invalid configuration in {cfg_file}") from e
        obj.instance = cfg_file.resolve().parent
        return obj
