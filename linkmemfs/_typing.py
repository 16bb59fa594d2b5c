from typing import TypedDict


class MFSStats(TypedDict):
    path_count: int
    node_count: int
    file_count: int
    dir_count: int
    used_bytes: int


class MFSFileInfo(TypedDict):
    name: str
    size: int
    mode: int
    is_dir: bool
    modified_at: float
