"""Registry mapping identifiers to system info collectors."""

from typing import Any, Dict, List, Mapping, Optional

from ..exceptions import ServiceNotFoundError
from ..logging_config import logger
from .protocol import SystemInfoCollector


class CollectorRegistry:
    """
    Registry of system info collectors keyed by identifier.

    Example:
        registry = CollectorRegistry({"composer": JsonComposerLockCollector(lock, manifest)})
        registry.register("symfony_kernel", KernelSystemInfoCollector(kernel, bundles))

        info = registry.collect("composer")
    """

    def __init__(self, collectors: Optional[Mapping[str, SystemInfoCollector]] = None) -> None:
        """Initialize the registry, optionally from an identifier to collector mapping."""
        self._collectors: Dict[str, SystemInfoCollector] = {}
        for identifier, collector in (collectors or {}).items():
            self.register(identifier, collector)

    def register(self, identifier: str, collector: SystemInfoCollector) -> None:
        """
        Register a collector.

        Args:
            identifier: Name the collector is looked up by
            collector: Collector implementation
        """
        self._collectors[identifier] = collector
        logger.debug(f"Registered collector: {identifier} ({type(collector).__name__})")

    def get(self, identifier: str) -> SystemInfoCollector:
        """
        Get a collector by identifier.

        Args:
            identifier: Name of the collector

        Returns:
            The registered collector

        Raises:
            ServiceNotFoundError: If no collector is registered under the identifier
        """
        collector = self._collectors.get(identifier)
        if collector is None:
            raise ServiceNotFoundError(identifier, available=list(self._collectors))
        return collector

    def collect(self, identifier: str) -> Any:
        """Run the collector registered under the identifier."""
        collector = self.get(identifier)
        logger.debug(f"Collecting system info: {identifier}", extra={"collector": identifier})
        return collector.collect()

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._collectors

    @property
    def identifiers(self) -> List[str]:
        """Get identifiers of all registered collectors."""
        return list(self._collectors)
