"""pytest fixture plugin.

Usage::

    # conftest.py
    pytest_plugins = ["linkmemfs._pytest_plugin"]

This makes the ``mfs`` fixture automatically available::

    def test_something(mfs):
        mfs.write_file("/a.txt", b"hello")
        mfs.link("/a.txt", "/b.txt")
"""

import pytest

from ._fs import MemoryFileSystem


@pytest.fixture
def mfs() -> MemoryFileSystem:
    """A fresh :class:`MemoryFileSystem` per test (function scope)."""
    return MemoryFileSystem()
