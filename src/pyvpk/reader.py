import struct
from typing import BinaryIO

from .errors import ShortReadError


class BinaryReader:
    """Forward-only little-endian reader over a binary stream.

    Strings are null-terminated and decoded one character per byte
    (latin-1), so every byte value round-trips to a single character.
    """

    def __init__(self, stream: BinaryIO, encoding: str = "latin-1") -> None:
        self._stream = stream
        self.encoding = encoding

    def read_bytes(self, size: int) -> bytes:
        data = self._stream.read(size)
        if len(data) != size:
            raise ShortReadError(size, len(data))
        return data

    def read_uint32(self) -> int:
        return struct.unpack("<I", self.read_bytes(4))[0]

    def read_uint16(self) -> int:
        return struct.unpack("<H", self.read_bytes(2))[0]

    def read_string(self) -> str:
        """Read up to (and consume) a null byte, or to the end of the stream."""
        result = bytearray()
        while True:
            char = self._stream.read(1)
            if not char or char == b"\x00":
                return result.decode(self.encoding)
            result.extend(char)

    def has_remaining(self) -> bool:
        old_offset = self._stream.tell()
        try:
            return self._stream.read(1) != b""
        finally:
            self._stream.seek(old_offset)
