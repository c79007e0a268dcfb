"""
builder.py

Builds the intermediate, uncompressed .tar archive from a list of paths.
"""

import fnmatch
import os
import tarfile
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import ArchiveIOError

# macOS Finder metadata, never worth archiving
DEFAULT_EXCLUDE = (".DS_Store",)


def get_file_size(path: str) -> int:
    """
    Get the size of a file in bytes.

    Args:
        path: Path to the file

    Returns:
        int: File size in bytes

    Raises:
        ArchiveIOError: If the file cannot be stat'ed
    """
    try:
        return os.stat(path).st_size
    except OSError as e:
        raise ArchiveIOError(f"Could not get size of {path}: {e}") from e


def default_archive_path(paths: Sequence[str]) -> str:
    """
    Derive the intermediate archive path from the first input path.

    Trailing separators are stripped, so "photos/" becomes "photos.tar".
    """
    if not paths:
        raise ValueError("At least one input path is required")

    base = paths[0].rstrip("/" + os.sep) or paths[0]
    return f"{base}.tar"


def member_name(path: str) -> str:
    """
    Name to store an input under, with leading "/", "./" and "../" removed
    the way tar strips them, so "../proj" is archived as "proj".

    Args:
        path: Input path as given by the caller

    Returns:
        str: Relative member name ("." when nothing is left)
    """
    parts = os.path.normpath(path).replace(os.sep, "/").split("/")
    while parts and parts[0] in ("", ".", ".."):
        parts.pop(0)
    return "/".join(parts) or "."


def _is_excluded(name: str, patterns: Iterable[str]) -> bool:
    basename = os.path.basename(name.rstrip("/"))
    return any(fnmatch.fnmatch(basename, pattern) for pattern in patterns)


def build_archive(
    paths: Sequence[str],
    archive_path: Optional[str] = None,
    exclude: Iterable[str] = DEFAULT_EXCLUDE,
    verbose: bool = False,
) -> Tuple[str, int]:
    """
    Write all files under the given paths into a single uncompressed tar.

    Directories are walked recursively. Any entry whose name matches one of
    the exclusion patterns is skipped; an excluded directory is not
    descended into. Members keep the paths they were given with, minus any
    leading "/", "./" or "../", so the archive extracts back into the same
    layout.

    Args:
        paths: Files and directories to archive, in order
        archive_path: Where to write the .tar (default: derived from paths[0])
        exclude: Glob patterns matched against each entry's basename
        verbose: Print every member as it is added

    Returns:
        Tuple[str, int]: (archive path, archive size in bytes)

    Raises:
        ValueError: If paths is empty
        ArchiveIOError: If an input is missing or unreadable, or the archive
            cannot be written. No partial archive is left behind.
    """
    if not paths:
        raise ValueError("At least one input path is required")

    if archive_path is None:
        archive_path = default_archive_path(paths)

    patterns: List[str] = list(exclude)

    missing = [p for p in paths if not os.path.lexists(p)]
    if missing:
        raise ArchiveIOError(f"No such file or directory: {', '.join(missing)}")

    def _filter(member: tarfile.TarInfo) -> Optional[tarfile.TarInfo]:
        if _is_excluded(member.name, patterns):
            return None
        if verbose:
            print(f"a {member.name}")
        return member

    try:
        with tarfile.open(archive_path, "w") as tar:
            for path in paths:
                tar.add(path, arcname=member_name(path), filter=_filter)
    except (OSError, tarfile.TarError) as e:
        # Don't leave a truncated archive around
        if os.path.exists(archive_path):
            try:
                os.remove(archive_path)
            except OSError:
                pass
        raise ArchiveIOError(f"Failed to create {archive_path}: {e}") from e

    return archive_path, get_file_size(archive_path)
