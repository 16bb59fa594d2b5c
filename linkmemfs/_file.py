from __future__ import annotations

from ._node import Node
from ._typing import MFSFileInfo


class MemoryFile:
    """A named view of a Node, as handed out by the storage.

    Views are not retained by the storage; two views of the same path
    share the Node but nothing else.
    """

    __slots__ = ("name", "flags", "node")

    def __init__(self, name: str, node: Node, flags: int = 0) -> None:
        self.name: str = name
        self.flags: int = flags
        self.node: Node = node

    @property
    def mode(self) -> int:
        return self.node.mode

    @property
    def is_dir(self) -> bool:
        return self.node.is_dir

    @property
    def size(self) -> int:
        if self.node.is_dir:
            return 0
        return self.node.content.get_size()

    def stat(self) -> MFSFileInfo:
        return MFSFileInfo(
            name=self.name,
            size=self.size,
            mode=self.node.mode,
            is_dir=self.node.is_dir,
            modified_at=self.node.modified_at,
        )

    def __repr__(self) -> str:
        return f"MemoryFile(name={self.name!r}, flags={self.flags:#o}, node={self.node!r})"
