from typing import List

from .entry import Entry


class Directory:
    """A group of entries that share one path inside the archive.

    The root of the archive is stored as a single space on disk and comes
    out of the constructor as an empty path.
    """

    SEPARATOR = "/"

    def __init__(self, path: str) -> None:
        self.path: str = path.strip()
        self.entries: List[Entry] = []

    def get_path_for(self, entry: Entry) -> str:
        """Return ``entry``'s path relative to the archive root, joined with '/'.

        Entries of the root directory get no leading separator (``name.ext``,
        not ``/name.ext``) so the result can always be joined onto a
        destination directory.
        """
        if not self.path:
            return entry.full_name
        return f"{self.path}{self.SEPARATOR}{entry.full_name}"

    def add_entry(self, entry: Entry) -> None:
        self.entries.append(entry)

    def remove_entry(self, entry: Entry) -> None:
        self.entries.remove(entry)

    def __repr__(self) -> str:
        return f"Directory({self.path!r}, entries={len(self.entries)})"
