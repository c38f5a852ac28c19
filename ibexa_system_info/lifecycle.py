"""Release lifecycle data for Ibexa DXP.

This module centralizes the release, end of maintenance (EOM) and end of
life (EOL) dates of Ibexa releases, keyed by "major.minor".

- RELEASES: estimated release dates, mainly used to compute trial expiry
- EOM: after this date open source releases stop receiving fixes
- EOL: after this date Enterprise/Commerce releases stop receiving security
  fixes and support

Only Enterprise/Commerce installations receive fixes for security issues
before the issues are disclosed. Length of maintenance for open source
releases depends on community maintenance efforts.

See: https://support.ibexa.co/Public/Service-Life
"""

from datetime import datetime, timezone
from typing import Dict, Optional

from .logging_config import logger
from .models import LifecycleStatus

RELEASES: Dict[str, str] = {
    "2.5": "2019-03-29T16:59:59+00:00",
    "3.0": "2020-04-02T23:59:59+00:00",
    "3.1": "2020-07-15T23:59:59+00:00",
    "3.2": "2020-10-23T23:59:59+00:00",
    "3.3": "2021-01-18T23:59:59+00:00",
}

EOM: Dict[str, str] = {
    "2.5": "2022-03-29T23:59:59+00:00",
    "3.0": "2020-07-10T23:59:59+00:00",
    "3.1": "2020-11-30T23:59:59+00:00",
    "3.2": "2021-02-28T23:59:59+00:00",
    "3.3": "2023-12-30T23:59:59+00:00",
}

EOL: Dict[str, str] = {
    "2.5": "2024-03-29T23:59:59+00:00",
    "3.0": "2020-08-31T23:59:59+00:00",
    "3.1": "2021-01-30T23:59:59+00:00",
    "3.2": "2021-04-30T23:59:59+00:00",
    "3.3": "2025-12-30T23:59:59+00:00",
}


def release_key(version: str) -> str:
    """
    Build the "major.minor" lookup key of a version string.

    Missing components are empty, so "3" becomes "3." and never matches a
    table entry.

    Args:
        version: Product version (e.g., "3.3.2")

    Returns:
        Lookup key (e.g., "3.3")
    """
    parts = version.split(".")
    major = parts[0]
    minor = parts[1] if len(parts) > 1 else ""
    return f"{major}.{minor}"


def parse_table_date(value: str) -> datetime:
    """Parse an ISO 8601 table date into an aware datetime."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        raise ValueError(f"Lifecycle date has no timezone: {value}")
    return parsed


def get_release_date(key: str) -> Optional[datetime]:
    """Get the estimated release date for a "major.minor" key."""
    value = RELEASES.get(key)
    return parse_table_date(value) if value is not None else None


def get_end_of_maintenance_date(key: str) -> Optional[datetime]:
    """Get the end of maintenance date for a "major.minor" key."""
    value = EOM.get(key)
    return parse_table_date(value) if value is not None else None


def get_end_of_life_date(key: str) -> Optional[datetime]:
    """Get the end of life date for a "major.minor" key."""
    value = EOL.get(key)
    return parse_table_date(value) if value is not None else None


def evaluate_lifecycle(version: str, now: Optional[datetime] = None) -> LifecycleStatus:
    """
    Determine whether a release is past its maintenance or life end dates.

    Each table is consulted independently. A release missing from a table is
    treated as not yet past that milestone.

    Args:
        version: Product version (e.g., "3.3.2")
        now: Reference time, defaults to the current UTC time

    Returns:
        LifecycleStatus for the release
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    key = release_key(version)
    eom_date = get_end_of_maintenance_date(key)
    eol_date = get_end_of_life_date(key)

    if eom_date is None and eol_date is None:
        logger.debug(f"No lifecycle data for release {key}")

    return LifecycleStatus(
        is_end_of_maintenance=eom_date is not None and eom_date < now,
        is_end_of_life=eol_date is not None and eol_date < now,
        end_of_maintenance_date=eom_date,
        end_of_life_date=eol_date,
    )
