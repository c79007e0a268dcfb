"""
errors.py

Exception types raised by the archive pipeline.
"""


class TargzError(Exception):
    """Base class for all archive pipeline errors."""


class ArchiveIOError(TargzError, IOError):
    """
    An input path is missing or unreadable, or the archive could not be
    created, written or measured.
    """


class BackendUnavailableError(TargzError):
    """No usable compression backend could be found on this machine."""


class BackendExecutionError(TargzError):
    """
    A compression backend exited with a non-zero status.

    Attributes:
        backend: Identifier of the backend that failed
        returncode: Exit status reported by the backend process
    """

    def __init__(self, backend: str, returncode: int):
        self.backend = backend
        self.returncode = returncode
        super().__init__(f"`{backend}` exited with status {returncode}")
