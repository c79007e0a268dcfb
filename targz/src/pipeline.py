"""
pipeline.py

Runs the full archive workflow: build .tar -> pick backend -> compress.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .builder import DEFAULT_EXCLUDE, build_archive, get_file_size
from .compressor import BackendRegistry, compress, default_registry
from .errors import BackendUnavailableError
from .selector import DEFAULT_THRESHOLD, select_backend


@dataclass
class ArchiveResult:
    """
    Outcome of a successful pipeline run.

    Attributes:
        archive_path: Path to the compressed archive
        original_size: Size of the uncompressed .tar in bytes
        compressed_size: Size of the compressed archive in bytes
        backend: Identifier of the backend that compressed it
    """

    archive_path: str
    original_size: int
    compressed_size: int
    backend: str


class ArchivePipeline:
    """
    Builds a compressed archive from a list of paths.

    Each stage finishes before the next starts, and the first error aborts
    the run. Concurrent runs must use distinct archive paths.

    Example:
        >>> pipeline = ArchivePipeline()
        >>> result = pipeline.run(["photos/"])
        >>> result.archive_path
        'photos.tar.gz'
    """

    def __init__(
        self,
        registry: Optional[BackendRegistry] = None,
        threshold: int = DEFAULT_THRESHOLD,
        exclude: Iterable[str] = DEFAULT_EXCLUDE,
        backend: Optional[str] = None,
        verbose: bool = False,
    ):
        """
        Args:
            registry: Available backends (default: zopfli, pigz, gzip)
            threshold: Size (bytes) below which zopfli is preferred
            exclude: Glob patterns of entries to leave out of the archive
            backend: Force this backend instead of applying the size policy
            verbose: List archive members as they are added
        """
        self.registry = registry if registry is not None else default_registry()
        self.threshold = threshold
        self.exclude = tuple(exclude)
        self.backend = backend
        self.verbose = verbose

    def choose_backend(self, size: int) -> str:
        available = self.registry.available()

        if self.backend:
            if self.backend not in available:
                raise BackendUnavailableError(f"Requested backend `{self.backend}` is not available")
            return self.backend

        return select_backend(size, available, threshold=self.threshold)

    def run(self, paths: Sequence[str], archive_path: Optional[str] = None) -> ArchiveResult:
        """
        Archive and compress the given paths.

        Args:
            paths: Files and directories to archive
            archive_path: Intermediate .tar path (default: derived from paths[0])

        Returns:
            ArchiveResult: Where the archive went and how big it is

        Raises:
            ArchiveIOError: If building or measuring the archive fails
            BackendUnavailableError: If no usable backend exists
            BackendExecutionError: If the backend fails; the .tar is kept
        """
        tar_path, original_size = build_archive(
            paths, archive_path=archive_path, exclude=self.exclude, verbose=self.verbose
        )

        backend_name = self.choose_backend(original_size)
        backend = self.registry.get(backend_name)

        compressed_path = compress(tar_path, backend)

        return ArchiveResult(
            archive_path=compressed_path,
            original_size=original_size,
            compressed_size=get_file_size(compressed_path),
            backend=backend_name,
        )
