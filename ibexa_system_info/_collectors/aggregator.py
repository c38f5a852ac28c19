"""Collector aggregating everything known about the Ibexa installation."""

from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Union

from ..exceptions import ComposerFileNotFoundError, ComposerFileValidationError
from ..lifecycle import evaluate_lifecycle
from ..logging_config import logger
from ..models import ComposerSystemInfo, IbexaSystemInfo
from ..product import DXP_PACKAGES, UNKNOWN_RELEASE, resolve_identity
from ..stability import PACKAGE_WATCH_REGEX, Stability, compute_stability
from .protocol import SystemInfoCollector

# Packages carrying the product version, checked in order
CORE_PACKAGES = ("ibexa/core", "ezsystems/ezplatform-kernel", "ezsystems/ezpublish-kernel")

# Kernel packages are versioned apart from the product: ezplatform-kernel 1.N
# ships with 3.N and ezpublish-kernel 7.N with 2.N
KERNEL_PRODUCT_MAJORS: Dict[str, Dict[str, str]] = {
    "ezsystems/ezplatform-kernel": {"1": "3"},
    "ezsystems/ezpublish-kernel": {"7": "2"},
}


def detect_release(composer_info: Optional[ComposerSystemInfo]) -> Optional[str]:
    """
    Read the product version from the locked core package.

    ibexa/core carries the product version itself. The legacy kernels are
    translated, so ezplatform-kernel "v1.3.4" gives "3.3.4".

    Args:
        composer_info: Installed packages, may be None

    Returns:
        Product version without a leading "v" (e.g., "3.3.2"), None if no
        core package with a known version line is locked
    """
    if composer_info is None:
        return None
    for name in CORE_PACKAGES:
        package = composer_info.packages.get(name)
        if package is None:
            continue
        version = package.branch.lstrip("v")
        majors = KERNEL_PRODUCT_MAJORS.get(name)
        if majors is None:
            return version
        major, _, rest = version.partition(".")
        if major in majors:
            return f"{majors[major]}.{rest}" if rest else majors[major]
        logger.debug(f"No product release known for {name} {package.branch}")
    return None


class IbexaSystemInfoCollector:
    """
    Collects information about the Ibexa distribution and version.

    Composer data is read again on every collect() call. A missing or
    malformed composer.lock / composer.json is not fatal: the snapshot is
    still produced, with the enterprise flag off and stability "stable".

    Example:
        composer = JsonComposerLockCollector("composer.lock", "composer.json")
        collector = IbexaSystemInfoCollector(composer, project_dir="/var/www")
        info = collector.collect()
        print(info.name, info.release, info.stability.value)
    """

    def __init__(
        self,
        composer_collector: SystemInfoCollector,
        project_dir: Union[str, Path],
        release: Optional[str] = None,
        debug: bool = False,
    ) -> None:
        self.composer_collector = composer_collector
        self.project_dir = Path(project_dir)
        self.release = release
        self.debug = debug

    def collect_composer_info(self) -> Optional[ComposerSystemInfo]:
        """Read Composer data, None when the files are missing or malformed."""
        try:
            return self.composer_collector.collect()
        except (ComposerFileNotFoundError, ComposerFileValidationError) as e:
            logger.warning(f"Composer information unavailable: {e}")
            return None

    @property
    def vendor_dir(self) -> Path:
        return self.project_dir / "vendor"

    def collect(self, now: Optional[datetime] = None) -> IbexaSystemInfo:
        """
        Build the installation snapshot.

        Args:
            now: Reference time for lifecycle checks, defaults to the current UTC time

        Returns:
            IbexaSystemInfo snapshot

        Raises:
            UnknownStabilityLevelError: If Composer data holds an unknown stability
        """
        composer_info = self.collect_composer_info()
        release = self.release or detect_release(composer_info) or UNKNOWN_RELEASE
        variant = resolve_identity(self.vendor_dir)
        lifecycle = evaluate_lifecycle(release, now)

        is_enterprise = False
        stability = Stability.STABLE
        composer_summary = None
        if composer_info is not None:
            is_enterprise = composer_info.has_any_package(DXP_PACKAGES)
            stability = compute_stability(composer_info, PACKAGE_WATCH_REGEX)
            composer_summary = {"minimumStability": composer_info.minimum_stability}

        return IbexaSystemInfo(
            name=variant.product_name,
            release=release,
            variant=variant.value,
            debug=self.debug,
            is_end_of_maintenance=lifecycle.is_end_of_maintenance,
            is_end_of_life=lifecycle.is_end_of_life,
            end_of_maintenance_date=lifecycle.end_of_maintenance_date,
            end_of_life_date=lifecycle.end_of_life_date,
            is_enterprise=is_enterprise,
            stability=stability,
            lowest_stability=stability,
            composer_info=composer_summary,
        )
