"""System info collector implementations."""

from .composer_lock import JsonComposerLockCollector
from .kernel import ApplicationKernel, KernelSystemInfoCollector

__all__ = [
    "ApplicationKernel",
    "JsonComposerLockCollector",
    "KernelSystemInfoCollector",
]
