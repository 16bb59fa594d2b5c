import stat

from linkmemfs._file import MemoryFile
from linkmemfs._node import Node


def test_node_type_bits():
    assert Node(stat.S_IFDIR | 0o755).is_dir
    assert not Node(stat.S_IFREG | 0o644).is_dir
    assert Node(stat.S_IFREG | 0o640).perm == 0o640


def test_node_starts_empty():
    node = Node(stat.S_IFREG | 0o644)
    assert node.content.get_size() == 0


def test_touch_moves_modified_at_forward():
    node = Node(stat.S_IFREG | 0o644)
    node.modified_at = 0.0
    node.touch()
    assert node.modified_at > 0.0


def test_views_share_node():
    node = Node(stat.S_IFREG | 0o644)
    a = MemoryFile("a", node)
    b = MemoryFile("b", node)
    a.node.content.write_at(0, b"shared")
    assert b.size == 6
    assert b.stat()["name"] == "b"


def test_directory_view_has_zero_size():
    node = Node(stat.S_IFDIR | 0o755)
    node.content.write_at(0, b"ignored")
    view = MemoryFile("d", node)
    assert view.size == 0
    assert view.stat()["is_dir"]
