from __future__ import annotations

import errno
import logging
import os
import stat

from ._exceptions import MFSDirectoryNotEmptyError, MFSInvariantError
from ._file import MemoryFile
from ._node import Node
from ._path import (
    is_descendant,
    normalize_path,
    path_parts,
    rebase,
    split_path,
)

logger = logging.getLogger(__name__)

# Permission bits for directories created implicitly by link() and rename().
LINK_PARENT_PERM: int = 0o666
MOVE_PARENT_PERM: int = 0o644


def _pair_error(
    exc_cls: type[OSError], code: int, src: str, dst: str
) -> OSError:
    return exc_cls(code, os.strerror(code), src, None, dst)


class Storage:
    """Path-addressed node store.

    Two flat indexes are kept in step with each other:

    * ``_files`` maps every normalized path to its :class:`Node`. Hard links
      are simply several keys holding the same Node object.
    * ``_children`` maps every directory path to ``{name: Node}`` for its
      immediate entries.

    There is no locking; callers serialize access.
    """

    def __init__(self, root_perm: int = 0o777) -> None:
        self._files: dict[str, Node] = {}
        self._children: dict[str, dict[str, Node]] = {}
        self._files["/"] = Node(stat.S_IFDIR | root_perm)
        self._children["/"] = {}

    # -- lookups --

    def has(self, path: str) -> bool:
        return normalize_path(path) in self._files

    def get(self, path: str) -> MemoryFile | None:
        npath = normalize_path(path)
        node = self._files.get(npath)
        if node is None:
            return None
        return MemoryFile(split_path(npath)[1] or "/", node)

    def must_get(self, path: str) -> MemoryFile:
        f = self.get(path)
        if f is None:
            raise MFSInvariantError(f"couldn't find {path!r}")
        return f

    def children(self, path: str) -> list[MemoryFile]:
        entries = self._children.get(normalize_path(path), {})
        return [MemoryFile(name, node) for name, node in entries.items()]

    def items(self) -> list[tuple[str, Node]]:
        """All (path, node) pairs, sorted by path."""
        return sorted(self._files.items())

    # -- mutations --

    def new(self, path: str, mode: int, flags: int = 0) -> MemoryFile | None:
        npath = normalize_path(path)
        if npath in self._files:
            if not self.must_get(npath).is_dir:
                raise FileExistsError(errno.EEXIST, f"File exists: '{path}'", path)
            return None

        self._check_ancestors(npath, path)
        node = Node(mode)
        self._register(npath, node)
        logger.debug("Created %s (mode %s)", npath, stat.filemode(mode))
        return MemoryFile(split_path(npath)[1], node, flags)

    def link(self, target: str, link: str) -> None:
        ntarget = normalize_path(target)
        nlink = normalize_path(link)

        node = self._files.get(ntarget)
        if node is None:
            raise _pair_error(FileNotFoundError, errno.ENOENT, target, link)
        if nlink in self._files:
            raise _pair_error(FileExistsError, errno.EEXIST, target, link)
        parent = self._files.get(split_path(nlink)[0])
        if parent is None or not parent.is_dir:
            raise _pair_error(FileNotFoundError, errno.ENOENT, target, link)
        if node.is_dir:
            raise _pair_error(PermissionError, errno.EPERM, target, link)

        self._files[nlink] = node
        self._create_parent(nlink, LINK_PARENT_PERM, node)
        logger.debug("Linked %s -> %s", nlink, ntarget)

    def rename(self, src: str, dst: str) -> None:
        nsrc = normalize_path(src)
        ndst = normalize_path(dst)

        node = self._files.get(nsrc)
        if node is None:
            raise _pair_error(FileNotFoundError, errno.ENOENT, src, dst)
        if nsrc == "/":
            raise ValueError("Cannot rename the root directory.")
        if nsrc == ndst:
            return
        if is_descendant(ndst, nsrc):
            raise ValueError(f"Cannot move '{src}' into its own subtree '{dst}'")
        existing = self._files.get(ndst)
        if existing is not None:
            if existing is node:
                # POSIX: two links to the same file, nothing to do
                return
            if existing.is_dir:
                raise _pair_error(FileExistsError, errno.EEXIST, src, dst)
            if node.is_dir:
                raise _pair_error(NotADirectoryError, errno.ENOTDIR, src, dst)
        self._check_ancestors(ndst, dst)

        moves = [(nsrc, ndst)]
        for p in self._files:
            if is_descendant(p, nsrc):
                moves.append((p, rebase(p, nsrc, ndst)))
        # Parents first, so every child lands in its parent's moved entry set.
        moves.sort(key=lambda m: len(path_parts(m[0])))

        for old, new in moves:
            self._move(old, new)
        logger.debug("Renamed %s -> %s (%d paths)", nsrc, ndst, len(moves))

    def remove(self, path: str) -> None:
        npath = normalize_path(path)
        node = self._files.get(npath)
        if node is None:
            raise FileNotFoundError(
                errno.ENOENT, f"No such file or directory: '{path}'", path
            )
        if npath == "/":
            raise ValueError("Cannot remove the root directory.")
        if node.is_dir and self._children.get(npath):
            raise MFSDirectoryNotEmptyError(path)

        parent, name = split_path(npath)
        siblings = self._children.get(parent)
        if siblings is None or name not in siblings:
            raise MFSInvariantError(f"{npath!r} missing from entries of {parent!r}")
        del siblings[name]
        del self._files[npath]
        if node.is_dir:
            self._children.pop(npath, None)
        logger.debug("Removed %s", npath)

    # -- internals --

    def _check_ancestors(self, npath: str, path_for_error: str) -> None:
        current = ""
        for part in path_parts(npath)[:-1]:
            current += "/" + part
            node = self._files.get(current)
            if node is None:
                return
            if not node.is_dir:
                raise NotADirectoryError(
                    errno.ENOTDIR, f"Not a directory: '{current}'", path_for_error
                )

    def _register(self, npath: str, node: Node) -> None:
        self._files[npath] = node
        if node.is_dir:
            self._children.setdefault(npath, {})
        self._create_parent(npath, stat.S_IMODE(node.mode), node)

    def _create_parent(self, npath: str, perm: int, node: Node) -> None:
        parent, name = split_path(npath)
        if not name:
            return
        if parent not in self._files:
            self._register(parent, Node(stat.S_IFDIR | perm))
        elif not self.must_get(parent).is_dir:
            raise MFSInvariantError(f"parent of {npath!r} is not a directory")
        self._children.setdefault(parent, {})[name] = node

    def _move(self, old: str, new: str) -> None:
        node = self._files[old]
        self._files[new] = node
        entries = self._children.pop(old, None)
        if entries is not None:
            self._children[new] = entries
        self._create_parent(new, MOVE_PARENT_PERM, node)

        del self._files[old]
        old_parent, old_name = split_path(old)
        siblings = self._children.get(old_parent)
        if siblings is not None:
            siblings.pop(old_name, None)
