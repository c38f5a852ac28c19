"""Package stability levels and aggregate stability evaluation.

Stability levels follow Composer's naming (dev, alpha, beta, RC, stable).
The enum order runs from least stable to most stable, so comparing two
levels answers "which one is less stable".

Usage:
    from ibexa_system_info.stability import Stability, compute_stability

    level = compute_stability(composer_info)
    if level < Stability.STABLE:
        print(f"Installation runs {level.value} packages")
"""

import re
from enum import Enum
from functools import total_ordering
from typing import TYPE_CHECKING, Optional, Pattern, Union

from .exceptions import UnknownStabilityLevelError
from .logging_config import logger

if TYPE_CHECKING:
    from .models import ComposerSystemInfo

# Vendors we watch for stability
PACKAGE_WATCH_REGEX = re.compile(r"^(doctrine|ezsystems|silversolutions|symfony)/")

# Composer stores stability flags in composer.lock as these numbers
COMPOSER_STABILITY_FLAGS = {
    0: "stable",
    5: "RC",
    10: "beta",
    15: "alpha",
    20: "dev",
}

# Same modifier grammar Composer's VersionParser uses
_MODIFIER_REGEX = re.compile(
    r"[._-]?(?:(stable|beta|b|rc|alpha|a|patch|pl|p)((?:[.-]?\d+)*)?)?([.-]?dev)?(?:\+.*)?$",
    re.IGNORECASE,
)


@total_ordering
class Stability(Enum):
    """Package stability, ordered least stable (dev) to most stable (stable)."""

    DEV = "dev"
    ALPHA = "alpha"
    BETA = "beta"
    RC = "RC"
    STABLE = "stable"

    @property
    def rank(self) -> int:
        """Position in the stability order, 0 for dev and 4 for stable."""
        return _ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Stability):
            return NotImplemented
        return self.rank < other.rank

    def is_less_stable_than(self, other: "Stability") -> bool:
        return self.rank < other.rank

    @classmethod
    def from_value(cls, value: Union[str, int, "Stability"], package: Optional[str] = None) -> "Stability":
        """
        Resolve a stability from its name or Composer numeric flag.

        Names are matched case-insensitively ("rc" and "RC" are the same level).

        Args:
            value: Stability name, Composer numeric flag, or Stability member
            package: Package the value belongs to, for error reporting

        Returns:
            The matching Stability member

        Raises:
            UnknownStabilityLevelError: If the value is not a known level
        """
        if isinstance(value, Stability):
            return value
        # bool is an int subclass and never a valid flag
        if isinstance(value, bool):
            raise UnknownStabilityLevelError(value, package)
        if isinstance(value, int):
            name = COMPOSER_STABILITY_FLAGS.get(value)
            if name is None:
                raise UnknownStabilityLevelError(value, package)
            return cls(name)
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        raise UnknownStabilityLevelError(value, package)


_ORDER = (Stability.DEV, Stability.ALPHA, Stability.BETA, Stability.RC, Stability.STABLE)


def parse_version_stability(version: str) -> Stability:
    """
    Derive the stability of a Composer version string.

    Examples:
        "dev-master" -> dev
        "3.3.x-dev" -> dev
        "v4.0.0-beta2" -> beta
        "1.0.0-RC1" -> RC
        "2.1.0" -> stable

    Args:
        version: Version as written in composer.lock

    Returns:
        Stability of the version
    """
    # Strip the "#commit-reference" suffix
    version = version.split("#", 1)[0].strip()

    if version.startswith("dev-") or version.endswith("-dev"):
        return Stability.DEV

    match = _MODIFIER_REGEX.search(version.lower())
    if match is None:
        return Stability.STABLE

    if match.group(3):
        return Stability.DEV

    modifier = match.group(1)
    if modifier in ("beta", "b"):
        return Stability.BETA
    if modifier in ("alpha", "a"):
        return Stability.ALPHA
    if modifier == "rc":
        return Stability.RC

    return Stability.STABLE


def compute_stability(
    composer_info: "ComposerSystemInfo",
    watch_pattern: Union[str, Pattern[str]] = PACKAGE_WATCH_REGEX,
) -> Stability:
    """
    Compute the lowest stability across watched packages.

    Starts from the root project's minimum-stability (stable when undeclared)
    and lowers it for every watched package that is less stable. Packages
    that are stable or carry no stability never raise the result.

    Args:
        composer_info: Installed packages and root minimum-stability
        watch_pattern: Regex selecting the packages to consider

    Returns:
        The least stable level found

    Raises:
        UnknownStabilityLevelError: If a stability value is not a known level
    """
    pattern = re.compile(watch_pattern) if isinstance(watch_pattern, str) else watch_pattern

    if composer_info.minimum_stability is not None:
        result = Stability.from_value(composer_info.minimum_stability)
    else:
        result = Stability.STABLE

    for name, package in composer_info.packages.items():
        if not pattern.search(name):
            continue

        if package.stability is None:
            continue

        stability = Stability.from_value(package.stability, package=name)
        if stability is Stability.STABLE:
            continue

        if stability.is_less_stable_than(result):
            logger.debug(f"Package {name} lowers stability to {stability.value}")
            result = stability

    return result
