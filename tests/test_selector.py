"""
Unit tests for backend selection policy.

Tests cover:
- Threshold boundary for the slow backend
- Fast/fallback ordering
- Missing fallback
- Determinism
"""

import pytest

from targz.src.errors import BackendUnavailableError
from targz.src.selector import DEFAULT_THRESHOLD, GZIP, PIGZ, ZOPFLI, select_backend

ALL = frozenset({ZOPFLI, PIGZ, GZIP})


class TestSelectBackend:
    """Tests for select_backend."""

    def test_default_threshold(self):
        assert DEFAULT_THRESHOLD == 50_000_000

    @pytest.mark.parametrize("size", [0, 1, 10_000_000, DEFAULT_THRESHOLD - 1])
    def test_small_archive_prefers_zopfli(self, size):
        assert select_backend(size, ALL) == ZOPFLI
        assert select_backend(size, {ZOPFLI}) == ZOPFLI
        assert select_backend(size, {ZOPFLI, GZIP}) == ZOPFLI

    @pytest.mark.parametrize("size", [DEFAULT_THRESHOLD, DEFAULT_THRESHOLD + 1, 10**12])
    def test_large_archive_never_uses_zopfli(self, size):
        assert select_backend(size, ALL) == PIGZ
        assert select_backend(size, {ZOPFLI, GZIP}) == GZIP

    def test_small_archive_without_zopfli_uses_pigz(self):
        assert select_backend(1000, {PIGZ, GZIP}) == PIGZ

    @pytest.mark.parametrize("size", [0, 1000, DEFAULT_THRESHOLD, 10**12])
    def test_only_fallback_available(self, size):
        assert select_backend(size, {GZIP}) == GZIP

    def test_custom_threshold(self):
        assert select_backend(100, ALL, threshold=100) == PIGZ
        assert select_backend(99, ALL, threshold=100) == ZOPFLI

    def test_nothing_available_raises(self):
        with pytest.raises(BackendUnavailableError):
            select_backend(1000, frozenset())

    def test_large_archive_with_only_zopfli_raises(self):
        """zopfli is never a fallback for large archives."""
        with pytest.raises(BackendUnavailableError):
            select_backend(DEFAULT_THRESHOLD, {ZOPFLI})

    def test_unknown_backends_ignored(self):
        assert select_backend(1000, {"xz", GZIP}) == GZIP

    def test_repeated_calls_agree(self):
        available = {PIGZ, GZIP}
        results = {select_backend(123_456, available) for _ in range(50)}
        assert results == {PIGZ}
