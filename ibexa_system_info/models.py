"""Value objects produced by the system info collectors."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .stability import Stability


@dataclass(frozen=True)
class ComposerPackage:
    """
    A package installed according to composer.lock.

    Attributes:
        name: Package name (e.g., "ibexa/core")
        branch: Version as written in the lock file (e.g., "v4.6.2", "dev-main")
        alias: Branch alias declared in the lock, if any
        license: License identifiers
        stability: Stability name, or None when unknown
        date_time: Release time of the locked version
        homepage: Package homepage
        reference: Source reference (usually a commit hash)
    """

    name: str
    branch: str
    alias: Optional[str] = None
    license: Tuple[str, ...] = ()
    stability: Optional[str] = None
    date_time: Optional[datetime] = None
    homepage: Optional[str] = None
    reference: Optional[str] = None


@dataclass(frozen=True)
class ComposerSystemInfo:
    """
    Installed packages plus the root project's minimum-stability.

    Attributes:
        packages: Read-only mapping of package name to ComposerPackage
        minimum_stability: Root composer.json minimum-stability, None if undeclared
    """

    packages: Mapping[str, ComposerPackage] = field(default_factory=dict)
    minimum_stability: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "packages", MappingProxyType(dict(self.packages)))

    def has_any_package(self, names: List[str]) -> bool:
        """Check whether at least one of the given packages is installed."""
        return any(name in self.packages for name in names)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "minimumStability": self.minimum_stability,
            "packages": {
                name: {
                    "version": package.branch,
                    "alias": package.alias,
                    "license": list(package.license),
                    "stability": package.stability,
                    "time": _isoformat(package.date_time),
                    "homepage": package.homepage,
                    "reference": package.reference,
                }
                for name, package in sorted(self.packages.items())
            },
        }


@dataclass(frozen=True)
class LifecycleStatus:
    """End of maintenance / end of life status of a release."""

    is_end_of_maintenance: bool = False
    is_end_of_life: bool = False
    end_of_maintenance_date: Optional[datetime] = None
    end_of_life_date: Optional[datetime] = None


@dataclass(frozen=True)
class KernelSystemInfo:
    """
    Information about the host application kernel.

    Attributes:
        environment: Application environment (e.g., "prod", "dev")
        debug_mode: Whether the application runs in debug mode
        version: Host framework version
        bundles: Active bundles, name to import path, sorted case-insensitively
        project_dir: Project root directory
        cache_dir: Cache directory
        log_dir: Log directory
        charset: Application charset
    """

    environment: str
    debug_mode: bool
    version: str
    bundles: Dict[str, str]
    project_dir: str
    cache_dir: str
    log_dir: str
    charset: str = "UTF-8"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class IbexaSystemInfo:
    """
    Snapshot of the Ibexa installation.

    Built once per collection and never modified afterwards.

    Attributes:
        name: Product name (e.g., "Ibexa Experience")
        release: Product version (e.g., "3.3.2")
        variant: Product variant identifier ("commerce", "experience", "content", "oss")
        debug: Whether the application runs in debug mode
        is_end_of_maintenance: Whether the release is past its end of maintenance
        is_end_of_life: Whether the release is past its end of life
        end_of_maintenance_date: End of maintenance date, if known
        end_of_life_date: End of life date, if known
        is_enterprise: Whether any commercial package is listed in composer.lock
        stability: Lowest stability across watched packages
        lowest_stability: Same value as stability, kept for older consumers
        composer_info: {"minimumStability": ...} when Composer data was available
    """

    name: str
    release: str
    variant: str = "oss"
    debug: bool = False
    is_end_of_maintenance: bool = False
    is_end_of_life: bool = False
    end_of_maintenance_date: Optional[datetime] = None
    end_of_life_date: Optional[datetime] = None
    is_enterprise: bool = False
    stability: Stability = Stability.STABLE
    lowest_stability: Stability = Stability.STABLE
    composer_info: Optional[Dict[str, Optional[str]]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "name": self.name,
            "release": self.release,
            "variant": self.variant,
            "debug": self.debug,
            "isEndOfMaintenance": self.is_end_of_maintenance,
            "isEndOfLife": self.is_end_of_life,
            "endOfMaintenanceDate": _isoformat(self.end_of_maintenance_date),
            "endOfLifeDate": _isoformat(self.end_of_life_date),
            "isEnterprise": self.is_enterprise,
            "stability": self.stability.value,
            "lowestStability": self.lowest_stability.value,
            "composerInfo": self.composer_info,
        }


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None
