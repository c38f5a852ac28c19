"""Helpers for building composer.lock content in tests."""

from typing import Any, Dict


def lock_package(name: str, version: str, **extra: Any) -> Dict[str, Any]:
    """Build a composer.lock package entry."""
    data: Dict[str, Any] = {
        "name": name,
        "version": version,
        "source": {"type": "git", "url": f"https://github.com/{name}.git", "reference": "0123456789abcdef"},
        "license": ["GPL-2.0-only"],
        "time": "2021-01-18T12:00:00+00:00",
    }
    data.update(extra)
    return data
