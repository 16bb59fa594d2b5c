"""Reusable hard-link behaviour tests.

Any filesystem object exposing ``open``, ``open_file``, ``stat``,
``read_dir``, ``link``, ``rename`` and ``remove`` with the same semantics
as :class:`~linkmemfs.MemoryFileSystem` can be checked by subclassing
:class:`LinkSuite` and providing an ``fs`` fixture::

    class TestMyLinks(LinkSuite):
        @pytest.fixture
        def fs(self):
            return MyFileSystem()

Assertions are made on exception types only, never on messages.
"""
import os

import pytest


def write_file(fs, path: str, data: bytes, perm: int = 0o644) -> None:
    with fs.open_file(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm) as f:
        f.write(data)


def read_all(fs, path: str) -> bytes:
    with fs.open(path, "rb") as f:
        return f.read()


class LinkSuite:
    """Hard-link contract tests.

    Subclasses must override the ``fs`` fixture to return a fresh, empty
    filesystem for every test.
    """

    @pytest.fixture
    def fs(self):
        raise NotImplementedError("LinkSuite subclasses must provide an 'fs' fixture")

    def test_link(self, fs):
        write_file(fs, "file", b"")
        fs.link("file", "link")

    def test_link_nested(self, fs):
        write_file(fs, "file", b"hello world!")
        fs.link("file", "linkA")
        fs.link("linkA", "linkB")

        fi = fs.stat("linkB")
        assert fi["name"] == "linkB"
        assert fi["size"] == 12

    def test_link_with_non_existent_target(self, fs):
        with pytest.raises(FileNotFoundError):
            fs.link("file", "link")

    def test_link_with_existing_link(self, fs):
        write_file(fs, "link", b"")
        with pytest.raises(OSError):
            fs.link("file", "link")

    def test_link_over_existing_path(self, fs):
        write_file(fs, "file", b"a")
        write_file(fs, "link", b"b")
        with pytest.raises(FileExistsError):
            fs.link("file", "link")

    def test_open_with_link_to_absolute_path(self, fs):
        write_file(fs, "dir/file", b"foo")
        fs.link("/dir/file", "dir/link")

        with fs.open("dir/link") as f:
            assert f.read() == b"foo"

    def test_link_properly_named(self, fs):
        write_file(fs, "dir/file", b"")
        fs.link("dir/file", "link")

        with fs.open("link") as f:
            assert f.name == "link"

        fis = fs.read_dir("/")
        assert len(fis) == 2
        assert "link" in [fi["name"] for fi in fis]

    def test_rename_with_link(self, fs):
        write_file(fs, "dir/file", b"foo")
        fs.link("dir/file", "link")
        fs.rename("link", "newlink")

        with fs.open("newlink") as f:
            assert f.read() == b"foo"
            assert f.name == "newlink"

    def test_rename_target_with_link(self, fs):
        write_file(fs, "dir/file", b"foo")
        fs.link("dir/file", "link")
        fs.rename("dir/file", "dif/newfile")

        assert read_all(fs, "link") == b"foo"
        assert fs.stat("link")["name"] == "link"

    def test_remove_link_target(self, fs):
        write_file(fs, "file", b"foo")
        fs.link("file", "link")
        fs.remove("file")

        assert read_all(fs, "link") == b"foo"

    def test_remove_link(self, fs):
        write_file(fs, "file", b"foo")
        fs.link("file", "link")
        fs.remove("link")

        with pytest.raises(FileNotFoundError):
            fs.open("link")
        assert read_all(fs, "file") == b"foo"

    def test_write_to_link(self, fs):
        write_file(fs, "dir/file", b"foo")
        fs.link("dir/file", "link")
        write_file(fs, "link", b"bar")

        assert read_all(fs, "dir/file") == b"bar"

    def test_write_to_target(self, fs):
        write_file(fs, "dir/file", b"foo")
        fs.link("dir/file", "link")
        write_file(fs, "dir/file", b"bar")

        assert read_all(fs, "link") == b"bar"
