from __future__ import annotations

import os
from typing import TYPE_CHECKING, Optional

from .reader import BinaryReader

if TYPE_CHECKING:
    from .archive import Archive


class Entry:
    """Metadata for one packed file and the logic to read its bytes.

    An entry's payload is ``preload_data`` followed by ``length`` bytes
    stored either right after the header and tree of the directory file
    (``archive_index == TERMINATOR``) or at ``offset`` in the numbered
    sibling file ``archive_index``.
    """

    TERMINATOR = 0x7FFF

    def __init__(
        self,
        archive: Archive,
        archive_index: int,
        preload_data: Optional[bytes],
        file_name: str,
        extension: str,
        crc: int,
        offset: int,
        length: int,
        terminator: int,
    ) -> None:
        self.archive = archive
        self.archive_index = archive_index
        self.preload_data = preload_data
        self.file_name = file_name.strip()
        self.extension = extension.strip()
        self.crc = crc
        self.offset = offset
        self.length = length
        self.terminator = terminator

    @property
    def full_name(self) -> str:
        return f"{self.file_name}.{self.extension}"

    @property
    def preload_size(self) -> int:
        return len(self.preload_data) if self.preload_data else 0

    @property
    def size(self) -> int:
        """Total number of bytes ``read_data`` returns."""
        return self.preload_size + self.length

    def target_path(self) -> str:
        """Return the container file that holds the on-disk part of this entry."""
        # TERMINATOR marks data stored in the directory file itself, even for split archives.
        if self.archive.is_multi_part and self.archive_index != self.TERMINATOR:
            return self.archive.get_child_archive(self.archive_index)
        return self.archive.path

    def read_data(self) -> bytes:
        preload = self.preload_data or b""
        if self.length == 0:
            # Nothing lives on disk; don't touch the container at all.
            return preload

        target = self.target_path()
        with open(target, "rb") as file:
            position = self.offset
            if self.archive_index == self.TERMINATOR:
                position += self.archive.tree_length + self.archive.header_length
            file.seek(position)
            data = BinaryReader(file).read_bytes(self.length)
        return preload + data

    def extract(self, destination: str | os.PathLike) -> None:
        """Write the whole payload to ``destination``, replacing any existing file."""
        data = self.read_data()
        with open(destination, "wb") as out_file:
            out_file.write(data)

    def __repr__(self) -> str:
        return (
            f"Entry({self.full_name!r}, archive_index=0x{self.archive_index:04X}, "
            f"offset={self.offset}, length={self.length}, preload={self.preload_size})"
        )
