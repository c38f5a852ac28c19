"""Settings for ibexa-system-info.

Settings are resolved from, lowest precedence first:
1. Defaults
2. A YAML file shaped like the bundle configuration:

    ibexa_system_info:
        system_info:
            powered_by:
                enabled: true
                release: major
        bundles:
            AppBundle: app.bundle.AppBundle

3. Explicit values (CLI options, which fall back to environment variables)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .exceptions import ConfigurationError
from .logging_config import logger
from .product import RELEASE_FORMATS

CONFIG_ROOT_KEY = "ibexa_system_info"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class Settings:
    """Configuration settings for system info collection."""

    project_dir: Path = Path(".")
    composer_lock: Optional[Path] = None
    composer_json: Optional[Path] = None
    release: Optional[str] = None
    environment: str = "prod"
    debug: bool = False
    powered_by_enabled: bool = True
    powered_by_release: str = "major"
    bundles: Dict[str, str] = field(default_factory=dict)
    log_level: str = "INFO"

    @property
    def lock_file_path(self) -> Path:
        return Path(self.composer_lock) if self.composer_lock else Path(self.project_dir) / "composer.lock"

    @property
    def json_file_path(self) -> Path:
        return Path(self.composer_json) if self.composer_json else Path(self.project_dir) / "composer.json"

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not Path(self.project_dir).is_dir():
            raise ConfigurationError(f"Project directory does not exist: {self.project_dir}")

        if self.powered_by_release not in RELEASE_FORMATS:
            raise ConfigurationError(
                f"Invalid powered_by.release '{self.powered_by_release}', expected one of {RELEASE_FORMATS}"
            )

        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level '{self.log_level}', expected one of {LOG_LEVELS}")

        if not isinstance(self.bundles, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in self.bundles.items()
        ):
            raise ConfigurationError("bundles must map bundle names to import paths")

        if self.release is not None and not self.release.strip():
            raise ConfigurationError("Release cannot be empty")


def _mapping(parent: Dict[str, Any], key: str, path: Path) -> Dict[str, Any]:
    """Return parent[key] as a mapping, empty when unset."""
    value = parent.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"'{key}' in {path} must be a mapping")
    return value


def _boolean(value: Any, key: str, path: Path) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{key} in {path} must be true or false, got {value!r}")
    return value


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML configuration file into Settings keyword arguments.

    Args:
        path: Path to the YAML file

    Returns:
        Dict of Settings field names to values found in the file

    Raises:
        ConfigurationError: If the file cannot be read or has the wrong shape
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")

    root = _mapping(data, CONFIG_ROOT_KEY, path)

    values: Dict[str, Any] = {}

    system_info = _mapping(root, "system_info", path)
    powered_by = _mapping(system_info, "powered_by", path)
    if "enabled" in powered_by:
        values["powered_by_enabled"] = _boolean(powered_by["enabled"], "system_info.powered_by.enabled", path)
    if "release" in powered_by:
        values["powered_by_release"] = str(powered_by["release"])

    if "bundles" in root:
        values["bundles"] = root["bundles"]

    for key in ("project_dir", "composer_lock", "composer_json", "release", "environment"):
        if key in root:
            values[key] = root[key]

    if "debug" in root:
        values["debug"] = _boolean(root["debug"], "debug", path)

    # YAML reads "3.3" as a float
    if values.get("release") is not None:
        values["release"] = str(values["release"])

    logger.debug(f"Loaded configuration from {path}: {sorted(values)}")
    return values


def build_settings(config_file: Optional[Union[str, Path]] = None, **overrides: Any) -> Settings:
    """
    Build and validate Settings.

    Args:
        config_file: Optional YAML configuration file
        **overrides: Explicit values; None means "not given" and is ignored

    Returns:
        Validated Settings

    Raises:
        ConfigurationError: If configuration is invalid
    """
    values: Dict[str, Any] = {}
    if config_file:
        values.update(load_config_file(config_file))
    values.update({key: value for key, value in overrides.items() if value is not None})

    for key in ("project_dir", "composer_lock", "composer_json"):
        if values.get(key) is not None:
            if not isinstance(values[key], (str, Path)):
                raise ConfigurationError(f"{key} must be a path, got {values[key]!r}")
            values[key] = Path(values[key]).expanduser()

    try:
        settings = Settings(**values)
    except TypeError as e:
        raise ConfigurationError(f"Unknown setting: {e}") from e

    settings.validate()
    return settings
