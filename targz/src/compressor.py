"""
compressor.py

Pluggable gzip-compatible compression backends (zopfli, pigz, gzip) and the
step that runs one of them against the intermediate archive.
"""

import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, Iterable, List, Optional

from .builder import get_file_size
from .errors import ArchiveIOError, BackendExecutionError, BackendUnavailableError
from .selector import GZIP, PIGZ, PREFERENCE_ORDER, ZOPFLI


class BaseBackend(ABC):
    """
    Abstract base class for compression backends.

    A backend compresses a file in place: given "<path>" it produces
    "<path>.<extension>". Whether the input is removed afterwards depends on
    the tool, so callers must not rely on it.
    """

    name: str = ""
    extension: str = "gz"

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if this backend can be invoked on this machine."""
        pass

    @abstractmethod
    def run(self, path: str) -> int:
        """
        Compress a file.

        Args:
            path: Path to the file to compress

        Returns:
            int: Exit status, 0 on success
        """
        pass

    def output_path(self, path: str) -> str:
        return f"{path}.{self.extension}"


class CommandBackend(BaseBackend):
    """
    Backend that shells out to an external executable as `<exe> -v <path>`.
    """

    executable: str = ""

    def __init__(self, executable: Optional[str] = None):
        if executable is not None:
            self.executable = executable
        if not self.name:
            self.name = os.path.basename(self.executable)

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def command(self, path: str) -> List[str]:
        return [self.executable, "-v", path]

    def run(self, path: str) -> int:
        try:
            completed = subprocess.run(self.command(path), check=False)
        except FileNotFoundError as e:
            raise BackendUnavailableError(f"`{self.executable}` not found on PATH") from e
        return completed.returncode


class ZopfliBackend(CommandBackend):
    """
    Slow, high-ratio backend. zopfli keeps its input file after compressing.
    """

    name = ZOPFLI
    executable = "zopfli"


class PigzBackend(CommandBackend):
    """Parallel gzip implementation, uses all cores."""

    name = PIGZ
    executable = "pigz"


class GzipBackend(CommandBackend):
    """Plain gzip, the backend of last resort."""

    name = GZIP
    executable = "gzip"


class BackendRegistry:
    """
    Maps backend identifiers to backends.

    The pipeline asks the registry which backends are available and looks up
    the selected one, so tests can swap in fake backends without touching the
    host's installed tools.

    Example:
        >>> registry = BackendRegistry([GzipBackend()])
        >>> registry.available()
        frozenset({'gzip'})
    """

    def __init__(self, backends: Iterable[BaseBackend] = ()):
        self._backends: Dict[str, BaseBackend] = {}
        for backend in backends:
            self.register(backend)

    def register(self, backend: BaseBackend) -> None:
        if not backend.name:
            raise ValueError(f"Backend {backend!r} has no name")
        self._backends[backend.name] = backend

    def get(self, name: str) -> BaseBackend:
        try:
            return self._backends[name]
        except KeyError:
            raise BackendUnavailableError(f"Backend `{name}` is not registered") from None

    def names(self) -> List[str]:
        return list(self._backends)

    def available(self) -> FrozenSet[str]:
        """Probe every registered backend and return the usable ones."""
        return frozenset(name for name, backend in self._backends.items() if backend.is_available())


_BACKEND_CLASSES = {
    ZOPFLI: ZopfliBackend,
    PIGZ: PigzBackend,
    GZIP: GzipBackend,
}


def get_backend(backend_type: str) -> BaseBackend:
    """
    Factory function to create a backend by name.

    Args:
        backend_type: Backend name ("zopfli", "pigz" or "gzip")

    Returns:
        BaseBackend: Backend instance

    Raises:
        ValueError: If backend_type is not recognized
    """
    backend_type = backend_type.lower().strip()

    try:
        return _BACKEND_CLASSES[backend_type]()
    except KeyError:
        raise ValueError(
            f"Unknown compression backend: '{backend_type}'. "
            f"Supported backends: {', '.join(PREFERENCE_ORDER)}"
        ) from None


def default_registry() -> BackendRegistry:
    """Registry with the three standard backends in preference order."""
    return BackendRegistry(get_backend(name) for name in PREFERENCE_ORDER)


def compress(archive_path: str, backend: BaseBackend) -> str:
    """
    Compress the intermediate archive with the given backend.

    On success the uncompressed archive is removed. On failure it is left
    untouched so the caller can inspect it or retry by hand.

    Args:
        archive_path: Path to the uncompressed .tar
        backend: Backend to run

    Returns:
        str: Path to the compressed archive

    Raises:
        BackendExecutionError: If the backend exits with a non-zero status
        BackendUnavailableError: If the backend's executable cannot be found
        ArchiveIOError: If the backend reported success but produced no output
    """
    size = get_file_size(archive_path)
    print(f"Compressing .tar ({size // 1000} kB) using `{backend.name}`…", flush=True)

    compressed_path = backend.output_path(archive_path)
    existed = os.path.exists(compressed_path)

    returncode = backend.run(archive_path)
    if returncode != 0:
        # Drop partial output from this run, never a file that was already there
        if not existed and os.path.exists(compressed_path):
            os.remove(compressed_path)
        raise BackendExecutionError(backend.name, returncode)

    if not os.path.exists(compressed_path):
        raise ArchiveIOError(f"`{backend.name}` did not produce {compressed_path}")

    if os.path.exists(archive_path):
        os.remove(archive_path)

    return compressed_path
