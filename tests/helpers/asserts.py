def assert_stats_consistent(mfs):
    s = mfs.stats()
    assert set(s.keys()) == {
        "path_count",
        "node_count",
        "file_count",
        "dir_count",
        "used_bytes",
    }
    assert s["used_bytes"] >= 0
    assert s["dir_count"] >= 1
    assert s["node_count"] == s["file_count"] + s["dir_count"]
    assert s["path_count"] >= s["node_count"]


def assert_indexes_consistent(storage):
    """Every directory entry points at the node its full path maps to."""
    files = storage._files
    for dir_path, entries in storage._children.items():
        assert dir_path in files
        assert files[dir_path].is_dir
        for name, node in entries.items():
            child = dir_path.rstrip("/") + "/" + name
            assert files[child] is node
    for path in files:
        if path == "/":
            continue
        parent, _, name = path.rpartition("/")
        assert name in storage._children[parent or "/"]
