from __future__ import annotations

import errno
import os
import posixpath
import stat
from collections.abc import Iterator

from ._file import MemoryFile
from ._handle import MemoryFileHandle
from ._path import normalize_path
from ._storage import Storage
from ._typing import MFSFileInfo, MFSStats

_MODE_FLAGS: dict[str, int] = {
    "rb": os.O_RDONLY,
    "wb": os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    "ab": os.O_WRONLY | os.O_CREAT | os.O_APPEND,
    "r+b": os.O_RDWR,
    "xb": os.O_WRONLY | os.O_CREAT | os.O_EXCL,
}


def _check_perm(name: str, value: int) -> int:
    if not 0 <= value <= 0o7777:
        raise ValueError(f"Invalid {name}: {value:#o}. Expected permission bits in 0..0o7777.")
    return value


def _not_found(path: str) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, f"No such file or directory: '{path}'", path)


class MemoryFileSystem:
    """In-memory filesystem with hard-link support.

    All state lives in a single :class:`Storage` owned by this instance.
    Not thread-safe: serialize access externally if sharing between threads.
    """

    def __init__(self, default_perm: int = 0o666, dir_perm: int = 0o777) -> None:
        self._default_perm: int = _check_perm("default_perm", default_perm)
        self._dir_perm: int = _check_perm("dir_perm", dir_perm)
        self._storage = Storage(root_perm=self._dir_perm)

    # -- opening files --

    def open_file(
        self, path: str, flags: int = os.O_RDONLY, perm: int | None = None
    ) -> MemoryFileHandle:
        npath = normalize_path(path)
        f = self._storage.get(npath)
        if f is not None and f.is_dir:
            raise IsADirectoryError(errno.EISDIR, f"Is a directory: '{path}'", path)

        if f is None:
            if not flags & os.O_CREAT:
                raise _not_found(path)
            if perm is None:
                perm = self._default_perm
            f = self._storage.new(npath, stat.S_IFREG | _check_perm("perm", perm), flags)
            assert f is not None
        else:
            if flags & os.O_CREAT and flags & os.O_EXCL:
                raise FileExistsError(errno.EEXIST, f"File exists: '{path}'", path)
            f.flags = flags
            if flags & os.O_TRUNC and flags & (os.O_WRONLY | os.O_RDWR):
                if f.node.content.get_size():
                    f.node.content.truncate(0)
                    f.node.touch()
        return MemoryFileHandle(f, npath)

    def open(self, path: str, mode: str = "rb") -> MemoryFileHandle:
        flags = _MODE_FLAGS.get(mode)
        if flags is None:
            raise ValueError(
                f"Invalid mode '{mode}'. Binary modes only: {sorted(_MODE_FLAGS)}"
            )
        return self.open_file(path, flags)

    def create(self, path: str) -> MemoryFileHandle:
        return self.open_file(path, os.O_RDWR | os.O_CREAT | os.O_TRUNC)

    # -- metadata --

    def stat(self, path: str) -> MFSFileInfo:
        f = self._storage.get(path)
        if f is None:
            raise _not_found(path)
        return f.stat()

    def read_dir(self, path: str) -> list[MFSFileInfo]:
        entries = self._list_entries(path)
        return [f.stat() for f in sorted(entries, key=lambda f: f.name)]

    def listdir(self, path: str) -> list[str]:
        return [f.name for f in self._list_entries(path)]

    def _list_entries(self, path: str) -> list[MemoryFile]:
        f = self._storage.get(path)
        if f is None:
            raise _not_found(path)
        if not f.is_dir:
            raise NotADirectoryError(errno.ENOTDIR, f"Not a directory: '{path}'", path)
        return self._storage.children(path)

    def chmod(self, path: str, perm: int) -> None:
        f = self._storage.get(path)
        if f is None:
            raise _not_found(path)
        node = f.node
        node.mode = stat.S_IFMT(node.mode) | _check_perm("perm", perm)
        node.touch()

    def exists(self, path: str) -> bool:
        try:
            return self._storage.has(path)
        except ValueError:
            return False

    def is_dir(self, path: str) -> bool:
        try:
            f = self._storage.get(path)
        except ValueError:
            return False
        return f is not None and f.is_dir

    def is_file(self, path: str) -> bool:
        try:
            f = self._storage.get(path)
        except ValueError:
            return False
        return f is not None and not f.is_dir

    # -- structure --

    def mkdir(self, path: str, perm: int | None = None, exist_ok: bool = False) -> None:
        f = self._storage.get(path)
        if f is not None:
            if f.is_dir:
                if not exist_ok:
                    raise FileExistsError(errno.EEXIST, f"Directory exists: '{path}'", path)
                return
            raise FileExistsError(errno.EEXIST, f"File exists at path: '{path}'", path)
        if perm is None:
            perm = self._dir_perm
        self._storage.new(path, stat.S_IFDIR | _check_perm("perm", perm))

    def link(self, target: str, link: str) -> None:
        self._storage.link(target, link)

    def rename(self, src: str, dst: str) -> None:
        self._storage.rename(src, dst)

    def remove(self, path: str) -> None:
        self._storage.remove(path)

    # -- convenience --

    def read_file(self, path: str) -> bytes:
        with self.open(path, "rb") as f:
            return f.read()

    def write_file(self, path: str, data: bytes, perm: int = 0o644) -> int:
        with self.open_file(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm) as f:
            return f.write(data)

    def walk(self, path: str = "/") -> Iterator[tuple[str, list[str], list[str]]]:
        """Recursively walk the directory tree (top-down).

        Entries are listed in name order. The tree must not be restructured
        while the generator is live.
        """
        npath = normalize_path(path)
        if not self.is_dir(npath):
            if self.exists(npath):
                raise NotADirectoryError(errno.ENOTDIR, f"Not a directory: '{path}'", path)
            raise _not_found(path)
        yield from self._walk_dir(npath)

    def _walk_dir(self, dir_path: str) -> Iterator[tuple[str, list[str], list[str]]]:
        dirnames: list[str] = []
        filenames: list[str] = []
        for f in sorted(self._storage.children(dir_path), key=lambda f: f.name):
            if f.is_dir:
                dirnames.append(f.name)
            else:
                filenames.append(f.name)
        yield dir_path, dirnames, filenames
        for name in dirnames:
            yield from self._walk_dir(posixpath.join(dir_path, name))

    def stats(self) -> MFSStats:
        path_count = 0
        seen: set[int] = set()
        used_bytes = 0
        file_count = 0
        dir_count = 0
        for _path, node in self._storage.items():
            path_count += 1
            if id(node) in seen:
                continue
            seen.add(id(node))
            if node.is_dir:
                dir_count += 1
            else:
                file_count += 1
                used_bytes += node.content.get_size()
        return MFSStats(
            path_count=path_count,
            node_count=len(seen),
            file_count=file_count,
            dir_count=dir_count,
            used_bytes=used_bytes,
        )
