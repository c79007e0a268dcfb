"""Shared fixtures: fake compression backends and sample inputs."""

import gzip
import os
import shutil

import pytest

from targz.src.compressor import BackendRegistry, BaseBackend
from targz.src.selector import GZIP, PIGZ, ZOPFLI


class FakeBackend(BaseBackend):
    """
    In-process stand-in for an external compressor.

    Writes "<path>.gz" with the gzip module and mimics the exit status and
    input-removal behaviour of the real tools.
    """

    def __init__(self, name, available=True, returncode=0, keep_input=False):
        self.name = name
        self.available = available
        self.returncode = returncode
        self.keep_input = keep_input
        self.calls = []

    def is_available(self):
        return self.available

    def run(self, path):
        self.calls.append(path)
        if self.returncode != 0:
            return self.returncode

        with open(path, "rb") as src, gzip.open(self.output_path(path), "wb") as dst:
            shutil.copyfileobj(src, dst)
        if not self.keep_input:
            os.remove(path)
        return 0


def make_registry(available=(ZOPFLI, PIGZ, GZIP), failing=(), keep_input=()):
    return BackendRegistry(
        FakeBackend(
            name,
            available=name in available,
            returncode=1 if name in failing else 0,
            keep_input=name in keep_input,
        )
        for name in (ZOPFLI, PIGZ, GZIP)
    )


@pytest.fixture
def registry():
    """All three backends available and working."""
    return make_registry()


@pytest.fixture
def sample_tree(tmp_path):
    """A small directory with compressible text, a nested dir and Finder junk."""
    root = tmp_path / "project"
    (root / "docs").mkdir(parents=True)
    (root / "README.txt").write_text("hello archive\n" * 2000)
    (root / "docs" / "guide.txt").write_text("lorem ipsum dolor sit amet\n" * 2000)
    (root / ".DS_Store").write_bytes(b"\x00\x00\x00\x01Bud1")
    (root / "docs" / ".DS_Store").write_bytes(b"\x00\x00\x00\x01Bud1")
    return root


@pytest.fixture
def registry_factory():
    """Build a registry with chosen backends missing, failing or input-keeping."""
    return make_registry
