"""Collector for the host application kernel and its active bundles."""

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ...models import KernelSystemInfo


@dataclass(frozen=True)
class ApplicationKernel:
    """
    Description of the running host application.

    Attributes:
        environment: Application environment (e.g., "prod", "dev")
        debug: Whether the application runs in debug mode
        version: Host framework version
        project_dir: Project root directory
        cache_dir: Cache directory, defaults to <project_dir>/var/cache/<environment>
        log_dir: Log directory, defaults to <project_dir>/var/log
        charset: Application charset
    """

    environment: str
    debug: bool
    version: str
    project_dir: Path
    cache_dir: Optional[Path] = None
    log_dir: Optional[Path] = None
    charset: str = "UTF-8"

    def get_cache_dir(self) -> Path:
        return self.cache_dir or Path(self.project_dir) / "var" / "cache" / self.environment

    def get_log_dir(self) -> Path:
        return self.log_dir or Path(self.project_dir) / "var" / "log"


class KernelSystemInfoCollector:
    """Collects information about the application kernel we are running in.

    Bundles is a mapping of active bundle name to its import path, e.g.:
    {
        "AppBundle": "app.bundle.AppBundle",
        "IbexaCoreBundle": "ibexa.bundle.core.IbexaCoreBundle",
    }
    """

    def __init__(self, kernel: ApplicationKernel, bundles: Mapping[str, str]) -> None:
        self.kernel = kernel
        self.bundles = dict(bundles)

    def collect(self) -> KernelSystemInfo:
        """Collect kernel information with bundles sorted case-insensitively by name."""
        bundles = dict(sorted(self.bundles.items(), key=lambda item: item[0].lower()))

        return KernelSystemInfo(
            environment=self.kernel.environment,
            debug_mode=self.kernel.debug,
            version=self.kernel.version,
            bundles=bundles,
            project_dir=str(self.kernel.project_dir),
            cache_dir=str(self.kernel.get_cache_dir()),
            log_dir=str(self.kernel.get_log_dir()),
            charset=self.kernel.charset,
        )
