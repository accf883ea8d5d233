"""Configuration system for uxrank.

Reads and writes ``uxrank.toml`` into typed dataclasses with sensible
defaults for every value.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

import tomli_w

if sys.version_info >= (3, 12):
    import tomllib
else:
    import tomli as tomllib

from uxrank.exceptions import ConfigError

_T = TypeVar("_T")

__all__ = [
    "CONFIG_FILE",
    "Bm25Config",
    "DataConfig",
    "LimitsConfig",
    "OutputConfig",
    "UxrankConfig",
    "bundled_data_dir",
    "default_config",
    "load_config",
    "save_config",
]

logger = logging.getLogger(__name__)

CONFIG_FILE = "uxrank.toml"

_OUTPUT_FORMATS = ("md", "json")


def bundled_data_dir() -> Path:
    """Directory of the sample collections shipped with the package."""
    from importlib.resources import files

    return Path(str(files("uxrank") / "data"))


@dataclass
class DataConfig:
    """[data] section. An empty directory means the bundled sample data."""

    directory: str = ""
    reasoning_file: str = "ui-reasoning.json"

    def resolve_directory(self) -> Path:
        return Path(self.directory) if self.directory else bundled_data_dir()


@dataclass
class Bm25Config:
    """[bm25] section."""

    k1: float = 1.5
    b: float = 0.75


@dataclass
class LimitsConfig:
    """[limits] section: max results per collection search."""

    product: int = 1
    style: int = 3
    color: int = 2
    landing: int = 2
    typography: int = 2


@dataclass
class OutputConfig:
    """[output] section."""

    format: str = "md"
    template: str = "design_system.md.j2"
    template_dir: str = ""


@dataclass
class UxrankConfig:
    """Root configuration combining all sections."""

    data: DataConfig = field(default_factory=DataConfig)
    bm25: Bm25Config = field(default_factory=Bm25Config)
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


_SECTIONS: dict[str, type] = {
    "data": DataConfig,
    "bm25": Bm25Config,
    "limits": LimitsConfig,
    "output": OutputConfig,
}


def default_config() -> UxrankConfig:
    """Return a config with all default values."""
    return UxrankConfig()


def _config_to_dict(config: UxrankConfig) -> dict[str, object]:
    """Convert UxrankConfig to a nested dict suitable for TOML serialization."""
    return {name: dict(vars(getattr(config, name))) for name in _SECTIONS}


def save_config(config: UxrankConfig, path: Path) -> None:
    """Save configuration to a TOML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = _config_to_dict(config)
    try:
        with path.open("wb") as f:
            tomli_w.dump(data, f)
        logger.info("Saved config to %s", path)
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        raise ConfigError(f"Failed to save config to {path}: {e}") from e


def _coerce(section: str, key: str, value: object, default: object) -> object:
    """Check a value against the type of its default. Ints are accepted for floats."""
    expected = type(default)
    if not isinstance(value, bool):
        if isinstance(value, expected):
            return value
        if expected is float and isinstance(value, int):
            return float(value)
    raise ConfigError(f"{section}.{key} must be of type {expected.__name__}, got {value!r}")


def _load_section(section: str, cls: type[_T], data: object) -> _T:
    """Load a dataclass section from a dict, ignoring unknown keys."""
    if not isinstance(data, dict):
        raise ConfigError(f"Config section for {cls.__name__} must be a table")
    defaults = cls()
    known_fields = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
    filtered = {
        k: _coerce(section, k, v, getattr(defaults, k))
        for k, v in data.items()
        if k in known_fields
    }
    return cls(**filtered)


def _validate(config: UxrankConfig) -> None:
    if config.bm25.k1 < 0:
        raise ConfigError(f"bm25.k1 must be >= 0, got {config.bm25.k1}")
    if not 0.0 <= config.bm25.b <= 1.0:
        raise ConfigError(f"bm25.b must be between 0 and 1, got {config.bm25.b}")
    if config.output.format not in _OUTPUT_FORMATS:
        raise ConfigError(
            f"output.format must be one of {', '.join(_OUTPUT_FORMATS)}, "
            f"got {config.output.format!r}"
        )


def load_config(path: Path) -> UxrankConfig:
    """Load configuration from a TOML file.

    Missing sections or keys get default values.

    Raises:
        ConfigError: If the file is missing, unreadable, or holds invalid values.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_bytes()
        data = tomllib.loads(raw.decode("utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    config = UxrankConfig()
    for name, cls in _SECTIONS.items():
        if name in data:
            setattr(config, name, _load_section(name, cls, data[name]))

    _validate(config)
    logger.info("Loaded config from %s", path)
    return config
