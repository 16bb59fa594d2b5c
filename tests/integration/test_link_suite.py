import pytest
from linkmemfs import MemoryFileSystem
from linkmemfs.testing import LinkSuite


class TestMemoryFileSystemLinks(LinkSuite):
    @pytest.fixture
    def fs(self):
        return MemoryFileSystem()
