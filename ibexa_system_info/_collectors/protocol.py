"""Protocol definition for system info collectors."""

from typing import Any, Protocol


class SystemInfoCollector(Protocol):
    """Protocol for system info collector plugins.

    Each collector gathers one kind of diagnostic information and returns it
    as an immutable value object. Collectors are registered with
    CollectorRegistry under an identifier.

    Example:
        class ComposerCollector:
            def collect(self) -> ComposerSystemInfo:
                # Read composer.lock and return installed packages
                ...
    """

    def collect(self) -> Any:
        """Collect the information.

        Returns:
            A value object describing the collected information.

        Raises:
            SystemInfoError: If the information cannot be collected.
        """
        ...
