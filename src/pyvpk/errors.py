class VPKError(Exception):
    """Base class for everything the archive reader raises."""


class ArchiveFormatError(VPKError):
    """The archive (or the name of one of its parts) is not in the expected format."""


class ArchiveStateError(VPKError):
    """The operation does not apply to this archive, e.g. split lookup on a single-file archive."""


class ShortReadError(VPKError, IOError):
    """The stream ended before the requested number of bytes could be read."""

    def __init__(self, wanted: int, got: int) -> None:
        super().__init__(f"Unexpected end of file (wanted {wanted} bytes, got {got})")
        self.wanted = wanted
        self.got = got
