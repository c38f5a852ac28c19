"""Custom exceptions for ibexa-system-info."""

from typing import Optional


class SystemInfoError(Exception):
    """Base exception for all system info operations."""


class ConfigurationError(SystemInfoError):
    """Raised when configuration validation fails."""


class ComposerFileNotFoundError(SystemInfoError):
    """Raised when a Composer file needed for collection does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Composer file not found: {path}")
        self.path = path


class ComposerLockFileNotFoundError(ComposerFileNotFoundError):
    """Raised when composer.lock is missing."""


class ComposerFileValidationError(SystemInfoError):
    """Raised when a Composer file exists but is not structurally valid."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Composer file {path} is not valid: {reason}")
        self.path = path
        self.reason = reason


class UnknownStabilityLevelError(SystemInfoError):
    """Raised when a stability value is not one of the known levels."""

    def __init__(self, value: object, package: Optional[str] = None) -> None:
        where = f" for package '{package}'" if package else ""
        super().__init__(f"Unknown stability level {value!r}{where}")
        self.value = value
        self.package = package


class ServiceNotFoundError(SystemInfoError):
    """Raised when a named collector or service is not registered."""

    def __init__(self, identifier: str, available: Optional[list] = None) -> None:
        message = f"Service '{identifier}' not found"
        if available is not None:
            message += f". Available services: {sorted(available)}"
        super().__init__(message)
        self.identifier = identifier
