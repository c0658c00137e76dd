"""Typed configuration loading and access.

The config file is optional. When present it overrides the built-in
defaults below; command-line flags override the file.

Example ``acl2img.toml``::

    [image]
    registry = "ghcr.io"
    name = "kestrelinstitute/acl2"
    temp_tag = "arm64-temp"
    source_url = "https://github.com/acl2/acl2"

    [build]
    platform = "linux/arm64"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from .result import Err, Ok, Result

__all__ = [
    "Config",
    "ConfigError",
    "ImageConfig",
    "BuildConfig",
    "CONFIG_FILENAME",
    "DEFAULT_REGISTRY",
    "DEFAULT_IMAGE_NAME",
    "DEFAULT_TEMP_TAG",
    "DEFAULT_SOURCE_URL",
    "DEFAULT_PLATFORM",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "acl2img.toml"

DEFAULT_REGISTRY = "ghcr.io"
# Switch to kestrelinstitute/acl2 for production releases.
DEFAULT_IMAGE_NAME = "bendyarm/acl2"
DEFAULT_TEMP_TAG = "arm64-temp"
DEFAULT_SOURCE_URL = "https://github.com/acl2/acl2"
DEFAULT_PLATFORM = "linux/arm64"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ImageConfig:
    """Where the image is published."""

    registry: str = DEFAULT_REGISTRY
    name: str = DEFAULT_IMAGE_NAME
    temp_tag: str = DEFAULT_TEMP_TAG
    source_url: str = DEFAULT_SOURCE_URL


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """How the local image is built."""

    platform: str = DEFAULT_PLATFORM


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    image: ImageConfig = field(default_factory=ImageConfig)
    build: BuildConfig = field(default_factory=BuildConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        image = _section(data, "image")
        build = _section(data, "build")

        return cls(
            image=ImageConfig(
                registry=_setting(image, "registry", DEFAULT_REGISTRY),
                name=_setting(image, "name", DEFAULT_IMAGE_NAME),
                temp_tag=_setting(image, "temp_tag", DEFAULT_TEMP_TAG),
                source_url=_setting(image, "source_url", DEFAULT_SOURCE_URL),
            ),
            build=BuildConfig(
                platform=_setting(build, "platform", DEFAULT_PLATFORM),
            ),
        )


def _section(data: Mapping[str, object], name: str) -> Mapping[str, object]:
    """A ``[name]`` table, or an empty mapping if absent or not a table."""
    value = data.get(name)
    if isinstance(value, dict):
        return cast(dict[str, object], value)
    return {}


def _setting(section: Mapping[str, object], key: str, default: str) -> str:
    # Non-string or blank values fall back to the default.
    value = section.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _parse_toml(path: Path) -> Result[dict[str, object], ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        return Ok(tomllib.loads(path.read_bytes().decode("utf-8")))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(Config.from_dict(result.value))


def load_config_or_default(path: Path | None) -> Result[Config, ConfigError]:
    """Load config from ``path`` if it exists, else return the defaults.

    A file that exists but cannot be parsed is still an error.
    """
    if path is None or not path.exists():
        return Ok(Config())
    return load_config(path)
