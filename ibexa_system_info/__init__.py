"""ibexa-system-info package for collecting Ibexa installation diagnostics."""


def _get_version() -> str:
    """Get package version with fallback mechanisms."""
    # Method 1: Try importlib.metadata (preferred for installed packages)
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("ibexa-system-info")
    except PackageNotFoundError:
        pass

    # Method 2: Try reading from pyproject.toml directly
    try:
        from pathlib import Path

        import tomllib

        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
            return pyproject_data.get("tool", {}).get("poetry", {}).get("version", "unknown")
    except (ImportError, OSError, ValueError):
        pass

    return "unknown"


__version__ = _get_version()

from .exceptions import (  # noqa: E402
    ComposerFileNotFoundError,
    ComposerFileValidationError,
    ComposerLockFileNotFoundError,
    ConfigurationError,
    ServiceNotFoundError,
    SystemInfoError,
    UnknownStabilityLevelError,
)
from .lifecycle import evaluate_lifecycle  # noqa: E402
from .models import (  # noqa: E402
    ComposerPackage,
    ComposerSystemInfo,
    IbexaSystemInfo,
    KernelSystemInfo,
    LifecycleStatus,
)
from .product import ProductVariant, get_powered_by_name, resolve_identity  # noqa: E402
from .stability import Stability, compute_stability, parse_version_stability  # noqa: E402

__all__ = [
    "__version__",
    # Evaluators
    "compute_stability",
    "evaluate_lifecycle",
    "resolve_identity",
    "get_powered_by_name",
    "parse_version_stability",
    # Models
    "ComposerPackage",
    "ComposerSystemInfo",
    "IbexaSystemInfo",
    "KernelSystemInfo",
    "LifecycleStatus",
    "ProductVariant",
    "Stability",
    # Errors
    "SystemInfoError",
    "ConfigurationError",
    "ComposerFileNotFoundError",
    "ComposerLockFileNotFoundError",
    "ComposerFileValidationError",
    "UnknownStabilityLevelError",
    "ServiceNotFoundError",
]
