import posixpath


def normalize_path(path: str) -> str:
    converted = path.replace("\\", "/")
    if not converted:
        return "/"

    # Traversal check: simulate path resolution from root (depth 0)
    # relative paths are treated as if prepended with "/"
    parts = converted.split("/")
    depth = 0
    for part in parts:
        if part == "..":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Path traversal attempt detected: '{path}'")
        elif part and part != ".":
            depth += 1

    # a leading "//" is the same root as "/"
    return posixpath.normpath("/" + converted.lstrip("/"))


def split_path(npath: str) -> tuple[str, str]:
    """Split a normalized path into (parent, name). The root has no name."""
    if npath == "/":
        return "/", ""
    parent, name = posixpath.split(npath)
    return parent or "/", name


def path_parts(npath: str) -> list[str]:
    return [p for p in npath.split("/") if p]


def is_descendant(npath: str, ancestor: str) -> bool:
    """True if *ancestor*'s segments are a strict prefix of *npath*'s.

    Compared segment-wise: ``/dir2/x`` is not a descendant of ``/dir``.
    """
    a = path_parts(ancestor)
    p = path_parts(npath)
    return len(p) > len(a) and p[: len(a)] == a


def rebase(npath: str, old: str, new: str) -> str:
    """Move *npath* from under *old* to the same place under *new*."""
    rel = path_parts(npath)[len(path_parts(old)):]
    return posixpath.join(new, *rel) if rel else new
