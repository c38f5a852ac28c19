"""System info collectors.

This module provides the collectors that gather diagnostic information about
an Ibexa installation, and a registry to look them up by identifier:
- composer: installed packages and stability from composer.lock / composer.json
- ibexa: product name, release, lifecycle status and aggregate stability
- symfony_kernel: host application environment and active bundles

Example usage:
    from ibexa_system_info._collectors import create_default_registry

    registry = create_default_registry(settings)
    info = registry.collect("ibexa")
    print(f"{info.name} {info.release}")
"""

import platform

from ..config import Settings
from .aggregator import CORE_PACKAGES, IbexaSystemInfoCollector, detect_release
from .protocol import SystemInfoCollector
from .registry import CollectorRegistry
from .sources import ApplicationKernel, JsonComposerLockCollector, KernelSystemInfoCollector

COMPOSER_COLLECTOR = "composer"
IBEXA_COLLECTOR = "ibexa"
KERNEL_COLLECTOR = "symfony_kernel"


def create_default_registry(settings: Settings) -> CollectorRegistry:
    """
    Create a registry wired with all built-in collectors.

    Args:
        settings: Validated settings

    Returns:
        CollectorRegistry with composer, ibexa and symfony_kernel collectors
    """
    composer = JsonComposerLockCollector(settings.lock_file_path, settings.json_file_path)
    kernel = ApplicationKernel(
        environment=settings.environment,
        debug=settings.debug,
        version=platform.python_version(),
        project_dir=settings.project_dir,
    )

    return CollectorRegistry(
        {
            COMPOSER_COLLECTOR: composer,
            IBEXA_COLLECTOR: IbexaSystemInfoCollector(
                composer,
                project_dir=settings.project_dir,
                release=settings.release,
                debug=settings.debug,
            ),
            KERNEL_COLLECTOR: KernelSystemInfoCollector(kernel, settings.bundles),
        }
    )


__all__ = [
    # Main API
    "create_default_registry",
    "CollectorRegistry",
    "SystemInfoCollector",
    # Collectors
    "IbexaSystemInfoCollector",
    "JsonComposerLockCollector",
    "KernelSystemInfoCollector",
    "ApplicationKernel",
    # Helpers
    "detect_release",
    "CORE_PACKAGES",
    "COMPOSER_COLLECTOR",
    "IBEXA_COLLECTOR",
    "KERNEL_COLLECTOR",
]
