import struct

import pytest

SIGNATURE = 0x55AA1234
IN_DIR_FILE = 0x7FFF


def vpk_entry(name, preload=b"", index=IN_DIR_FILE, offset=0, length=0, crc=0, terminator=0xFFFF):
    return (name, crc, preload, index, offset, length, terminator)


def pack_tree(tree):
    """tree: [(extension, [(path, [vpk_entry(...), ...]), ...]), ...]"""
    out = bytearray()
    for extension, paths in tree:
        out += extension.encode("latin-1") + b"\x00"
        for path, entries in paths:
            out += path.encode("latin-1") + b"\x00"
            for name, crc, preload, index, offset, length, terminator in entries:
                out += name.encode("latin-1") + b"\x00"
                out += struct.pack("<IHHIIH", crc, len(preload), index, offset, length, terminator)
                out += preload
            out += b"\x00"
        out += b"\x00"
    out += b"\x00"
    return bytes(out)


def pack_archive(tree, version=1, payload=b"", signature=SIGNATURE, reserved=(0, 0, 0, 0)):
    tree_bytes = pack_tree(tree)
    header = struct.pack("<III", signature, version, len(tree_bytes))
    if version == 2:
        header += struct.pack("<IIII", *reserved)
    return header + tree_bytes + payload


@pytest.fixture
def make_vpk(tmp_path):
    def _make(name, tree, version=1, payload=b"", **kwargs):
        path = tmp_path / name
        path.write_bytes(pack_archive(tree, version=version, payload=payload, **kwargs))
        return path

    return _make


@pytest.fixture
def beep_vpk(make_vpk):
    tree = [("txt", [("sounds", [vpk_entry("beep", preload=b"AB", offset=0, length=2)])])]
    return make_vpk("beep.vpk", tree, payload=b"CD")
