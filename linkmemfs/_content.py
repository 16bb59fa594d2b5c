from ._exceptions import MFSInvalidOffsetError


class ContentBuffer:
    """Random-access byte storage owned by a single Node.

    Writes past the end zero-fill the gap. Reads past the end return a
    short (possibly empty) result, which is how end-of-stream is reported.
    """

    __slots__ = ("_buf",)

    def __init__(self, initial_data: bytes = b"") -> None:
        self._buf: bytearray = bytearray(initial_data)

    def get_size(self) -> int:
        return len(self._buf)

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def read_at(self, offset: int, size: int = -1) -> bytes:
        if offset < 0:
            raise MFSInvalidOffsetError(offset)
        if offset >= len(self._buf) or size == 0:
            return b""
        if size < 0:
            return bytes(self._buf[offset:])
        return bytes(self._buf[offset: offset + size])

    def readinto_at(self, buf: bytearray | memoryview, offset: int) -> int:
        if offset < 0:
            raise MFSInvalidOffsetError(offset)
        current_len = len(self._buf)
        if offset >= current_len:
            return 0
        n = min(len(buf), current_len - offset)
        buf[:n] = self._buf[offset: offset + n]
        return n

    def write_at(self, offset: int, data: bytes) -> int:
        if offset < 0:
            raise MFSInvalidOffsetError(offset)
        n = len(data)
        current_len = len(self._buf)
        if offset > current_len:
            self._buf.extend(bytes(offset - current_len))
            self._buf.extend(data)
        elif n == 0:
            return 0
        elif offset + n > current_len:
            overlap = current_len - offset
            self._buf[offset:current_len] = data[:overlap]
            self._buf.extend(data[overlap:])
        else:
            self._buf[offset: offset + n] = data
        return n

    def truncate(self, size: int) -> None:
        if size < 0:
            raise ValueError("truncate size must be >= 0")
        old_size = len(self._buf)
        if size == old_size:
            return
        if size > old_size:
            # POSIX: extend with zero bytes
            self._buf.extend(bytes(size - old_size))
            return
        del self._buf[size:]
