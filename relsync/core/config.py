"""Typed loading of the optional relsync.toml.

The file only overrides where the manifests live and which fields hold the
version. Without it the defaults match a Tauri app layout:
``package.json`` is authoritative and ``src-tauri/Cargo.toml`` follows.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "ManifestsConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "relsync.toml"

DEFAULT_PRIMARY = "package.json"
DEFAULT_SECONDARY = "src-tauri/Cargo.toml"
DEFAULT_PRIMARY_FIELD = "version"
DEFAULT_SECONDARY_FIELD = "package.version"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ManifestsConfig:
    """Manifest locations (relative to the repository root) and version fields."""

    primary: str = DEFAULT_PRIMARY
    secondary: str = DEFAULT_SECONDARY
    primary_field: str = DEFAULT_PRIMARY_FIELD
    secondary_field: str = DEFAULT_SECONDARY_FIELD

    def primary_path(self, root: Path) -> Path:
        return root / self.primary

    def secondary_path(self, root: Path) -> Path:
        return root / self.secondary


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    manifests: ManifestsConfig = field(default_factory=ManifestsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        manifests: StrDict = get_table(data, "manifests") or {}
        return cls(
            manifests=ManifestsConfig(
                primary=get_str(manifests, "primary") or DEFAULT_PRIMARY,
                secondary=get_str(manifests, "secondary") or DEFAULT_SECONDARY,
                primary_field=get_str(manifests, "primary_field") or DEFAULT_PRIMARY_FIELD,
                secondary_field=get_str(manifests, "secondary_field")
                or DEFAULT_SECONDARY_FIELD,
            )
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def _check_relative(value: str, *, key: str, path: Path) -> ConfigError | None:
    p = PurePosixPath(value.replace("\\", "/"))
    if p.is_absolute() or Path(value).is_absolute():
        return ConfigError(f"manifests.{key} must be relative to the root: {value}", path=path)
    if ".." in p.parts:
        return ConfigError(f"manifests.{key} must stay inside the root: {value}", path=path)
    return None


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate relsync.toml.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    config = Config.from_dict(result.value)
    for key in ("primary", "secondary"):
        problem = _check_relative(getattr(config.manifests, key), key=key, path=path)
        if problem is not None:
            return Err(problem)
    return Ok(config)


def load_config_or_default(root: Path) -> Result[Config, ConfigError]:
    """Load ``<root>/relsync.toml`` if present, else the defaults.

    A present-but-broken file is still an error.
    """
    path = root / CONFIG_FILENAME
    if not path.exists():
        return Ok(Config())
    return load_config(path)
