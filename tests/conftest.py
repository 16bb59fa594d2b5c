from linkmemfs._pytest_plugin import mfs  # noqa: F401
