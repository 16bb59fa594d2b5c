import errno


class MFSDirectoryNotEmptyError(OSError):
    """Raised when removing a directory that still has entries. Subclass of OSError."""
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(errno.ENOTEMPTY, f"Directory not empty: '{path}'", path)


class MFSInvalidOffsetError(ValueError):
    """Raised for a negative read/write offset. Subclass of ValueError."""
    def __init__(self, offset: int) -> None:
        self.offset = offset
        super().__init__(f"negative offset: {offset}")


class MFSInvariantError(RuntimeError):
    """Internal consistency failure between the path and directory indexes.

    Never raised for bad caller input; seeing one means the storage is corrupt.
    """
