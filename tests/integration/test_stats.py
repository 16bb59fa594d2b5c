import stat

import pytest
from tests.helpers.asserts import assert_indexes_consistent, assert_stats_consistent


def test_empty_filesystem(mfs):
    s = mfs.stats()
    assert s == {
        "path_count": 1,
        "node_count": 1,
        "file_count": 0,
        "dir_count": 1,
        "used_bytes": 0,
    }
    assert_stats_consistent(mfs)


def test_links_count_once(mfs):
    mfs.write_file("/a", b"12345")
    mfs.link("/a", "/b")
    mfs.link("/a", "/c")
    s = mfs.stats()
    assert s["path_count"] == 4
    assert s["node_count"] == 2
    assert s["file_count"] == 1
    assert s["used_bytes"] == 5
    assert_stats_consistent(mfs)
    assert_indexes_consistent(mfs._storage)


def test_stat_missing_raises(mfs):
    with pytest.raises(FileNotFoundError):
        mfs.stat("/nope")


def test_stat_directory(mfs):
    mfs.mkdir("/d")
    info = mfs.stat("/d")
    assert info["is_dir"]
    assert info["size"] == 0
    assert info["name"] == "d"
    assert stat.S_ISDIR(info["mode"])


def test_stat_root_name(mfs):
    assert mfs.stat("/")["name"] == "/"


def test_write_updates_modified_at(mfs):
    mfs.write_file("/f", b"")
    mfs._storage.get("/f").node.modified_at = 0.0
    mfs.write_file("/f", b"x")
    assert mfs.stat("/f")["modified_at"] > 0.0
