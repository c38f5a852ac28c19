"""Pytest configuration and shared fixtures for all tests."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

CLI_ENV_VARS = (
    "PROJECT_DIR",
    "COMPOSER_LOCK",
    "COMPOSER_JSON",
    "IBEXA_RELEASE",
    "APP_ENV",
    "APP_DEBUG",
    "POWERED_BY_ENABLED",
    "POWERED_BY_RELEASE",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "IBEXA_SYSTEM_INFO_CONFIG",
)


@pytest.fixture(autouse=True)
def clean_cli_environment(monkeypatch):
    """Keep host environment variables from leaking into CLI option defaults."""
    for name in CLI_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_project(tmp_path):
    """Create a project directory with composer files and vendor markers.

    Usage:
        project = make_project(
            packages=[lock_package("ibexa/core", "v3.3.2")],
            minimum_stability="dev",
            vendor=["ibexa/page-builder"],
        )
    """

    def _make(
        packages: Optional[List[Dict[str, Any]]] = None,
        packages_dev: Optional[List[Dict[str, Any]]] = None,
        minimum_stability: Optional[str] = None,
        stability_flags: Optional[Dict[str, int]] = None,
        aliases: Optional[List[Dict[str, str]]] = None,
        vendor: Optional[List[str]] = None,
        write_lock: bool = True,
        write_json: bool = True,
    ) -> Path:
        project = tmp_path / "project"
        project.mkdir(exist_ok=True)

        if write_lock:
            lock = {
                "_readme": ["This file locks the dependencies of your project to a known state"],
                "content-hash": "d41d8cd98f00b204e9800998ecf8427e",
                "packages": packages or [],
                "packages-dev": packages_dev or [],
                "aliases": aliases or [],
                "minimum-stability": minimum_stability or "stable",
                "stability-flags": stability_flags or [],
                "prefer-stable": True,
            }
            (project / "composer.lock").write_text(json.dumps(lock))

        if write_json:
            manifest: Dict[str, Any] = {"name": "ibexa/website-skeleton", "type": "project"}
            if minimum_stability is not None:
                manifest["minimum-stability"] = minimum_stability
            (project / "composer.json").write_text(json.dumps(manifest))

        for package in vendor or []:
            (project / "vendor" / package).mkdir(parents=True, exist_ok=True)

        return project

    return _make
