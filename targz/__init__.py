"""
targz

Build a .tar archive from files and directories and compress it with the
best gzip-compatible compressor available on this machine.
"""

from .src.compressor import BackendRegistry, BaseBackend, default_registry, get_backend
from .src.errors import (
    ArchiveIOError,
    BackendExecutionError,
    BackendUnavailableError,
    TargzError,
)
from .src.pipeline import ArchivePipeline, ArchiveResult
from .src.selector import DEFAULT_THRESHOLD, select_backend

__all__ = [
    "ArchiveIOError",
    "ArchivePipeline",
    "ArchiveResult",
    "BackendExecutionError",
    "BackendRegistry",
    "BackendUnavailableError",
    "BaseBackend",
    "DEFAULT_THRESHOLD",
    "TargzError",
    "default_registry",
    "get_backend",
    "select_backend",
]

__version__ = "1.0.0"
