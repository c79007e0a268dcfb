"""
selector.py

Chooses which compression backend to use for an archive of a given size.
"""

from typing import AbstractSet

from .errors import BackendUnavailableError

# High-ratio but slow; only worth it for smaller archives
ZOPFLI = "zopfli"
# Parallel gzip
PIGZ = "pigz"
# Last resort, expected on every system
GZIP = "gzip"

PREFERENCE_ORDER = (ZOPFLI, PIGZ, GZIP)

DEFAULT_THRESHOLD = 50_000_000


def select_backend(
    size: int,
    available: AbstractSet[str],
    threshold: int = DEFAULT_THRESHOLD,
    slow: str = ZOPFLI,
    fast: str = PIGZ,
    fallback: str = GZIP,
) -> str:
    """
    Pick a backend identifier from the set of available ones.

    Rules, first match wins:
        1. size < threshold and the slow backend is available -> slow
        2. the fast backend is available -> fast
        3. the fallback backend is available -> fallback

    Args:
        size: Uncompressed archive size in bytes
        available: Identifiers of backends that can be invoked on this host
        threshold: Size (bytes) below which the slow backend is preferred
        slow: Identifier of the high-ratio backend
        fast: Identifier of the parallel backend
        fallback: Identifier of the always-expected backend

    Returns:
        str: The selected backend identifier

    Raises:
        BackendUnavailableError: If none of the candidates is available
    """
    if size < threshold and slow in available:
        return slow

    if fast in available:
        return fast

    if fallback in available:
        return fallback

    raise BackendUnavailableError(
        f"No compression backend available (tried: {slow}, {fast}, {fallback}). "
        f"Install {fallback} or add it to PATH."
    )
