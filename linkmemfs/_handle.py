from __future__ import annotations

import io
import os

from ._file import MemoryFile
from ._typing import MFSFileInfo

_ACCESS_MASK = os.O_RDONLY | os.O_WRONLY | os.O_RDWR


class MemoryFileHandle:
    """Binary file handle over a :class:`MemoryFile` view.

    The cursor and open flags live here; the bytes live in the view's Node,
    shared with every other handle and alias of the same file.
    """

    def __init__(self, file: MemoryFile, path: str) -> None:
        self._file = file
        self._path = path
        self._flags = file.flags
        self._is_append: bool = bool(file.flags & os.O_APPEND)
        self._cursor: int = file.node.content.get_size() if self._is_append else 0
        self._is_closed: bool = False

    @property
    def name(self) -> str:
        return self._file.name

    @property
    def path(self) -> str:
        return self._path

    @property
    def closed(self) -> bool:
        return self._is_closed

    def _access(self) -> int:
        return self._flags & _ACCESS_MASK

    def _assert_readable(self) -> None:
        if self._access() == os.O_WRONLY:
            raise io.UnsupportedOperation(f"not readable: '{self._path}'")

    def _assert_writable(self) -> None:
        if self._access() == os.O_RDONLY:
            raise io.UnsupportedOperation(f"not writable: '{self._path}'")

    def _assert_open(self) -> None:
        if self._is_closed:
            raise ValueError("I/O operation on closed file.")

    def read(self, size: int = -1) -> bytes:
        self._assert_open()
        self._assert_readable()
        data = self._file.node.content.read_at(self._cursor, size)
        self._cursor += len(data)
        return data

    def readinto(self, buf: bytearray | memoryview) -> int:
        self._assert_open()
        self._assert_readable()
        n = self._file.node.content.readinto_at(buf, self._cursor)
        self._cursor += n
        return n

    def read_at(self, offset: int, size: int) -> bytes:
        """Positional read; the cursor is not moved."""
        self._assert_open()
        self._assert_readable()
        return self._file.node.content.read_at(offset, size)

    def write(self, data: bytes) -> int:
        self._assert_open()
        self._assert_writable()
        content = self._file.node.content
        if self._is_append:
            self._cursor = content.get_size()
        n = content.write_at(self._cursor, data)
        self._cursor += n
        if n > 0:
            self._file.node.touch()
        return n

    def write_at(self, offset: int, data: bytes) -> int:
        """Positional write; the cursor is not moved."""
        self._assert_open()
        self._assert_writable()
        if self._is_append:
            raise ValueError("write_at is not allowed on a handle opened for append")
        n = self._file.node.content.write_at(offset, data)
        if n > 0:
            self._file.node.touch()
        return n

    def seek(self, offset: int, whence: int = 0) -> int:
        self._assert_open()
        if whence == 0:
            if offset < 0:
                raise ValueError("seek offset must be >= 0 for SEEK_SET")
            new_pos = offset
        elif whence == 1:
            new_pos = self._cursor + offset
        elif whence == 2:
            new_pos = self._file.node.content.get_size() + offset
        else:
            raise ValueError(f"Invalid whence value: {whence}. Must be 0, 1, or 2.")
        if new_pos < 0:
            raise ValueError(f"Resulting cursor position {new_pos} is negative.")
        self._cursor = new_pos
        return self._cursor

    def tell(self) -> int:
        self._assert_open()
        return self._cursor

    def truncate(self, size: int | None = None) -> int:
        self._assert_open()
        self._assert_writable()
        target = self._cursor if size is None else size
        content = self._file.node.content
        before = content.get_size()
        content.truncate(target)
        if before != target:
            self._file.node.touch()
        return target

    def stat(self) -> MFSFileInfo:
        self._assert_open()
        return self._file.stat()

    def flush(self) -> None:
        self._assert_open()
        return None

    def readable(self) -> bool:
        self._assert_open()
        return self._access() != os.O_WRONLY

    def writable(self) -> bool:
        self._assert_open()
        return self._access() != os.O_RDONLY

    def seekable(self) -> bool:
        self._assert_open()
        return True

    def close(self) -> None:
        self._is_closed = True

    def __enter__(self) -> MemoryFileHandle:
        return self

    def __exit__(self, *args) -> None:
        self.close()
