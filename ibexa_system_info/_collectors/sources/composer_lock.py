"""Collector for composer.lock / composer.json (Composer, PHP)."""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from ...exceptions import ComposerLockFileNotFoundError
from ...logging_config import logger
from ...models import ComposerPackage, ComposerSystemInfo
from ...stability import Stability, parse_version_stability
from ...validation import load_composer_file


class JsonComposerLockCollector:
    """Collects installed packages from composer.lock.

    composer.lock is a JSON file with structure:
    {
        "packages": [
            {
                "name": "ibexa/core",
                "version": "v4.6.2",
                "source": {"reference": "abc123..."},
                "license": ["GPL-2.0-only"],
                "time": "2024-01-18T12:00:00+00:00",
                "extra": {"branch-alias": {"dev-main": "4.6.x-dev"}}
            }
        ],
        "packages-dev": [...],
        "aliases": [{"package": "...", "version": "...", "alias": "..."}],
        "stability-flags": {"ibexa/core": 20}
    }

    The root minimum-stability is read from composer.json, which is optional:
    without it minimum_stability is None. Both files are read again on every
    collect() call.
    """

    def __init__(self, lock_file: Union[str, Path], json_file: Union[str, Path]) -> None:
        self.lock_file = Path(lock_file)
        self.json_file = Path(json_file)

    def collect(self) -> ComposerSystemInfo:
        """
        Parse composer.lock and composer.json.

        Returns:
            ComposerSystemInfo with all locked packages

        Raises:
            ComposerLockFileNotFoundError: If composer.lock does not exist
            ComposerFileValidationError: If either file is malformed
            UnknownStabilityLevelError: If a stability value is not a known level
        """
        if not self.lock_file.is_file():
            raise ComposerLockFileNotFoundError(str(self.lock_file))

        lock_data = load_composer_file(self.lock_file, "composer-lock")
        json_data = self._load_manifest()

        stability_flags = lock_data.get("stability-flags") or {}
        aliases = self._extract_aliases(lock_data)

        packages: Dict[str, ComposerPackage] = {}
        for pkg_data in list(lock_data["packages"]) + list(lock_data.get("packages-dev") or []):
            package = self._build_package(pkg_data, stability_flags, aliases)
            packages[package.name] = package

        minimum_stability = json_data.get("minimum-stability")
        if minimum_stability is not None:
            minimum_stability = Stability.from_value(minimum_stability).value

        logger.debug(f"Read {len(packages)} package(s) from {self.lock_file}")

        return ComposerSystemInfo(packages=packages, minimum_stability=minimum_stability)

    def _load_manifest(self) -> Dict[str, Any]:
        if not self.json_file.is_file():
            logger.debug(f"No composer.json at {self.json_file}, minimum-stability is undeclared")
            return {}
        return load_composer_file(self.json_file, "composer-json")

    def _build_package(
        self,
        pkg_data: Dict[str, Any],
        stability_flags: Dict[str, int],
        aliases: Dict[Tuple[str, str], str],
    ) -> ComposerPackage:
        name = pkg_data["name"]
        version = pkg_data["version"]

        if name in stability_flags:
            stability = Stability.from_value(stability_flags[name], package=name)
        else:
            stability = parse_version_stability(version)

        alias = aliases.get((name, version))
        if alias is None:
            branch_aliases = (pkg_data.get("extra") or {}).get("branch-alias") or {}
            alias = branch_aliases.get(version)

        license_data = pkg_data.get("license") or ()
        if isinstance(license_data, str):
            license_data = (license_data,)

        return ComposerPackage(
            name=name,
            branch=version,
            alias=alias,
            license=tuple(license_data),
            stability=stability.value,
            date_time=self._parse_time(name, pkg_data.get("time")),
            homepage=pkg_data.get("homepage"),
            reference=self._extract_reference(pkg_data),
        )

    def _extract_aliases(self, lock_data: Dict[str, Any]) -> Dict[Tuple[str, str], str]:
        """Map (package, version) to the alias declared in the lock's aliases list."""
        result: Dict[Tuple[str, str], str] = {}
        for entry in lock_data.get("aliases") or []:
            version = entry.get("version")
            if version is not None:
                result[(entry["package"], version)] = entry["alias"]
        return result

    def _extract_reference(self, pkg_data: Dict[str, Any]) -> Optional[str]:
        for key in ("source", "dist"):
            section = pkg_data.get(key)
            if isinstance(section, dict) and section.get("reference"):
                return section["reference"]
        return None

    def _parse_time(self, name: str, value: Optional[str]) -> Optional[datetime]:
        if not value:
            return None
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.debug(f"Ignoring unparseable release time for {name}: {value}")
            return None
