import stat
import time

from ._content import ContentBuffer


class Node:
    """One physical file or directory.

    Every path that aliases the file holds this same object, so content
    written through one path is visible through all of them.
    """

    __slots__ = ("mode", "content", "modified_at")

    def __init__(self, mode: int) -> None:
        self.mode: int = mode
        self.content: ContentBuffer = ContentBuffer()
        self.modified_at: float = time.time()

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    @property
    def perm(self) -> int:
        return stat.S_IMODE(self.mode)

    def touch(self) -> None:
        self.modified_at = time.time()

    def __repr__(self) -> str:
        return f"Node(mode={stat.filemode(self.mode)!r}, size={self.content.get_size()})"
