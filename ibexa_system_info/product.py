"""Product variant detection for Ibexa installations."""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import ConfigurationError
from .logging_config import logger

# Packages that identify installation as "Content"
CONTENT_PACKAGES: List[str] = [
    "ibexa/workflow",
]

# Packages that identify installation as "Experience"
EXPERIENCE_PACKAGES: List[str] = [
    "ibexa/page-builder",
    "ezsystems/landing-page-fieldtype-bundle",
]

# Packages that identify installation as "Commerce"
COMMERCE_PACKAGES: List[str] = [
    "ibexa/commerce-transaction",
]

# Any of these in composer.lock marks a commercial installation
DXP_PACKAGES: List[str] = CONTENT_PACKAGES + EXPERIENCE_PACKAGES + COMMERCE_PACKAGES

PRODUCT_NAME_OSS = "Ibexa Open Source"

# Release reported when neither configuration nor composer.lock provides one
UNKNOWN_RELEASE = "unknown"

RELEASE_FORMATS = ("major", "minor", "none")


class ProductVariant(Enum):
    """Installed product variant."""

    COMMERCE = "commerce"
    EXPERIENCE = "experience"
    CONTENT = "content"
    OPEN_SOURCE = "oss"

    @property
    def product_name(self) -> str:
        return PRODUCT_NAMES[self]


PRODUCT_NAMES = {
    ProductVariant.COMMERCE: "Ibexa Commerce",
    ProductVariant.EXPERIENCE: "Ibexa Experience",
    ProductVariant.CONTENT: "Ibexa Content",
    ProductVariant.OPEN_SOURCE: PRODUCT_NAME_OSS,
}

# Checked in this order, first hit wins
_VARIANT_MARKERS = (
    (ProductVariant.COMMERCE, COMMERCE_PACKAGES[0]),
    (ProductVariant.EXPERIENCE, EXPERIENCE_PACKAGES[0]),
    (ProductVariant.CONTENT, CONTENT_PACKAGES[0]),
)


def resolve_identity(vendor_dir: Union[str, Path]) -> ProductVariant:
    """
    Detect the product variant from packages present in the vendor directory.

    This looks at the filesystem, not at composer.lock, so it can disagree
    with the lock-based enterprise flag when the two are out of sync.

    Args:
        vendor_dir: Composer vendor directory

    Returns:
        The detected ProductVariant, OPEN_SOURCE when no marker is present
    """
    vendor_path = Path(vendor_dir)
    for variant, package in _VARIANT_MARKERS:
        if (vendor_path / package).is_dir():
            logger.debug(f"Found {package} in {vendor_path}, product is {variant.product_name}")
            return variant
    return ProductVariant.OPEN_SOURCE


def get_name_by_packages(vendor_dir: Union[str, Path]) -> str:
    """Get the product name for the installation in the vendor directory."""
    return resolve_identity(vendor_dir).product_name


def get_powered_by_name(vendor_dir: Union[str, Path], release: Optional[str], version: str) -> str:
    """
    Build the "powered by" product name.

    Args:
        vendor_dir: Composer vendor directory
        release: "major" adds " v3", "minor" adds " v3.3", "none" or None adds nothing
        version: Product version (e.g., "3.3.2")

    Returns:
        Product name with the requested version suffix, no suffix when the
        version is UNKNOWN_RELEASE

    Raises:
        ConfigurationError: If release is not a known format
    """
    if release is not None and release not in RELEASE_FORMATS:
        raise ConfigurationError(f"Invalid powered-by release format '{release}', expected one of {RELEASE_FORMATS}")

    name = get_name_by_packages(vendor_dir)
    if version == UNKNOWN_RELEASE:
        return name

    parts = version.split(".")

    if release == "major":
        name += f" v{_leading_int(parts[0])}"
    elif release == "minor":
        minor = parts[1] if len(parts) > 1 else "0"
        name += f" v{parts[0]}.{minor}"

    return name


def _leading_int(value: str) -> int:
    """Integer prefix of a string, 0 when there is none."""
    digits = ""
    for char in value.strip():
        if not char.isdigit():
            break
        digits += char
    return int(digits) if digits else 0
