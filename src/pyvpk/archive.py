from __future__ import annotations

import os
from typing import List, Sequence, Tuple

from .directory import Directory
from .entry import Entry
from .errors import ArchiveFormatError, ArchiveStateError
from .reader import BinaryReader


class Archive:
    """
    A VPK archive: one directory file, optionally accompanied by numbered
    sibling files that hold the entry data.

    1. header (version 1, 12 bytes):
       - signature (4 bytes): always 0x55AA1234
       - version (4 bytes): 1 or 2
       - tree length (4 bytes): size of the directory tree that follows the header

    2. header (version 2, 28 bytes):
       - the version 1 fields
       - four reserved 4-byte words, kept but not interpreted

    3. directory tree, three levels, each level closed by an empty string:
       - extension (null-terminated)
         - path (null-terminated)
           - file name (null-terminated)
             - crc (4 bytes)
             - preload size (2 bytes)
             - archive index (2 bytes): 0x7FFF means "this file, after the tree"
             - offset (4 bytes)
             - length (4 bytes)
             - terminator (2 bytes)
             - preload data (preload size bytes)

    4. entry data:
       - after the tree in this file, or in "<name>_NNN.vpk" next to a
         "<name>_dir.vpk" directory file

    all integers are little-endian. Directories and entries keep their
    on-disk order; a path seen under two extensions gives two directories.
    """

    SIGNATURE = 0x55AA1234
    MULTI_PART_MARKER = "_dir"
    MULTI_PART_SUFFIX_LENGTH = len("_dir.vpk")
    CHILD_NAME_FORMAT = "{root}_{index:03d}.vpk"

    MINIMUM_VERSION = 1
    MAXIMUM_VERSION = 2
    HEADER_LENGTHS = {1: 12, 2: 28}
    RESERVED_WORDS = {1: 0, 2: 4}

    def __init__(self, path: str | os.PathLike) -> None:
        self.path: str = os.fspath(path)
        self.is_multi_part: bool = self.MULTI_PART_MARKER in self.name
        self.signature: int = 0
        self.version: int = 0
        self.tree_length: int = 0
        self.header_length: int = 0
        self.reserved: Tuple[int, ...] = ()
        self._directories: List[Directory] = []
        self.loaded: bool = False

    @property
    def directories(self) -> Sequence[Directory]:
        return tuple(self._directories)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def load(self) -> None:
        """Read the header and directory tree.

        Nothing is stored on the archive unless the whole header and tree
        parse; a bad signature or version raises ArchiveFormatError and
        read failures propagate as OSError.
        """
        if self.loaded:
            return
        with open(self.path, "rb") as file:
            reader = BinaryReader(file)

            signature = reader.read_uint32()
            version = reader.read_uint32()
            tree_length = reader.read_uint32()

            if signature != self.SIGNATURE:
                raise ArchiveFormatError(f"Invalid signature 0x{signature:08X} in {self.path}")
            if not self.MINIMUM_VERSION <= version <= self.MAXIMUM_VERSION:
                raise ArchiveFormatError(f"Unsupported version {version} in {self.path}")

            reserved = tuple(reader.read_uint32() for _ in range(self.RESERVED_WORDS[version]))
            directories = self._read_tree(reader)

        self.signature = signature
        self.version = version
        self.tree_length = tree_length
        self.header_length = self.HEADER_LENGTHS[version]
        self.reserved = reserved
        self._directories = directories
        self.loaded = True

    def _read_tree(self, reader: BinaryReader) -> List[Directory]:
        directories: List[Directory] = []
        while reader.has_remaining():
            extension = reader.read_string()
            if not extension:
                break

            while True:
                path = reader.read_string()
                if not path:
                    break

                directory = Directory(path)
                directories.append(directory)

                while True:
                    file_name = reader.read_string()
                    if not file_name:
                        break
                    directory.add_entry(self._read_entry(reader, file_name, extension))
        return directories

    def _read_entry(self, reader: BinaryReader, file_name: str, extension: str) -> Entry:
        crc = reader.read_uint32()
        preload_size = reader.read_uint16()
        archive_index = reader.read_uint16()
        offset = reader.read_uint32()
        length = reader.read_uint32()
        terminator = reader.read_uint16()

        preload_data = None
        if preload_size > 0:
            preload_data = reader.read_bytes(preload_size)

        return Entry(
            archive=self,
            archive_index=archive_index,
            preload_data=preload_data,
            file_name=file_name,
            extension=extension,
            crc=crc,
            offset=offset,
            length=length,
            terminator=terminator,
        )

    def get_child_archive(self, index: int) -> str:
        """Return the path of the numbered sibling file ``index``.

        ``pak01_dir.vpk`` with index 5 gives ``pak01_005.vpk`` in the same
        directory.
        """
        if not self.is_multi_part:
            raise ArchiveStateError(f"Archive is not multi-part: {self.path}")

        parent = os.path.dirname(self.path)
        if not parent:
            raise ArchiveFormatError(f"Archive has no parent directory: {self.path}")

        file_name = self.name
        if len(file_name) <= self.MULTI_PART_SUFFIX_LENGTH:
            raise ArchiveFormatError(f"Malformed multi-part archive name: {file_name}")

        root = file_name[: -self.MULTI_PART_SUFFIX_LENGTH]
        return os.path.join(parent, self.CHILD_NAME_FORMAT.format(root=root, index=index))

    def __repr__(self) -> str:
        return f"Archive({self.path!r}, version={self.version}, directories={len(self._directories)})"
