from ._exceptions import (
    MFSDirectoryNotEmptyError,
    MFSInvalidOffsetError,
    MFSInvariantError,
)
from ._file import MemoryFile
from ._fs import MemoryFileSystem
from ._handle import MemoryFileHandle
from ._storage import Storage
from ._typing import MFSFileInfo, MFSStats

__all__ = [
    "MemoryFileSystem",
    "MemoryFileHandle",
    "MemoryFile",
    "Storage",
    "MFSDirectoryNotEmptyError",
    "MFSInvalidOffsetError",
    "MFSInvariantError",
    "MFSFileInfo",
    "MFSStats",
]
__version__ = "0.1.0"
