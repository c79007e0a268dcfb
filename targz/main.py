"""
main.py

Command-line entry point: archive the given paths into <name>.tar.gz using
the best compressor available.

Configuration comes from the environment (or a .env file); command-line
options take precedence:
    TARGZ_THRESHOLD  size in bytes below which zopfli is preferred
    TARGZ_BACKEND    force a backend (zopfli, pigz or gzip)
    TARGZ_EXCLUDE    comma-separated patterns to leave out (default: .DS_Store)
"""

import argparse
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .src.builder import DEFAULT_EXCLUDE
from .src.compressor import BackendRegistry
from .src.errors import TargzError
from .src.pipeline import ArchivePipeline
from .src.selector import DEFAULT_THRESHOLD, PREFERENCE_ORDER


def format_kb(size: int) -> str:
    """
    Format a byte count the way the progress lines report it.

    Args:
        size: Size in bytes

    Returns:
        str: Size in (decimal) kilobytes, e.g. "10000 kB"
    """
    return f"{size // 1000} kB"


def parse_exclude(value: Optional[str]) -> List[str]:
    """
    Split a comma-separated TARGZ_EXCLUDE value into patterns.

    Args:
        value: Raw environment value, or None if unset

    Returns:
        List[str]: Non-empty patterns (default: .DS_Store)
    """
    if value is None:
        return list(DEFAULT_EXCLUDE)
    return [pattern.strip() for pattern in value.split(",") if pattern.strip()]


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command-line parser.

    Returns:
        argparse.ArgumentParser: Parser for paths and overrides
    """
    parser = argparse.ArgumentParser(
        prog="targz",
        description="Create a .tar.gz archive using zopfli, pigz or gzip, whichever fits best.",
    )
    parser.add_argument("paths", nargs="+", help="Files or directories to archive")
    parser.add_argument("-o", "--output", help="Intermediate .tar path (default: <first path>.tar)")
    parser.add_argument(
        "-t",
        "--threshold",
        type=int,
        help=f"Prefer zopfli below this many bytes (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument("-b", "--backend", choices=PREFERENCE_ORDER, help="Force a compression backend")
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        metavar="PATTERN",
        help="Leave out entries matching PATTERN (repeatable)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="List files as they are archived")
    return parser


def main(argv: Optional[List[str]] = None, registry: Optional[BackendRegistry] = None) -> int:
    """
    Run the archive pipeline from the command line.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])
        registry: Backends to choose from (default: zopfli, pigz, gzip)

    Returns:
        int: Exit code, 0 on success and 1 on failure
    """
    # Load environment variables from .env file
    load_dotenv()

    args = build_parser().parse_args(argv)

    threshold = args.threshold
    if threshold is None:
        try:
            threshold = int(os.getenv("TARGZ_THRESHOLD", DEFAULT_THRESHOLD))
        except ValueError:
            print(f"✗ TARGZ_THRESHOLD must be an integer, got: {os.getenv('TARGZ_THRESHOLD')!r}", file=sys.stderr)
            return 1

    backend = args.backend or os.getenv("TARGZ_BACKEND", "").strip() or None
    exclude = args.exclude if args.exclude else parse_exclude(os.getenv("TARGZ_EXCLUDE"))

    if backend is not None:
        backend = backend.lower()
        if backend not in PREFERENCE_ORDER:
            print(
                f"✗ Unknown compression backend: '{backend}'. "
                f"Supported backends: {', '.join(PREFERENCE_ORDER)}",
                file=sys.stderr,
            )
            return 1

    pipeline = ArchivePipeline(
        registry=registry,
        threshold=threshold,
        exclude=exclude,
        backend=backend,
        verbose=args.verbose,
    )

    try:
        result = pipeline.run(args.paths, archive_path=args.output)
    except TargzError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    print(f"{result.archive_path} ({format_kb(result.compressed_size)}) created successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
