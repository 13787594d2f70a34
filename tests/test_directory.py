from pyvpk.archive import Archive
from pyvpk.directory import Directory
from pyvpk.entry import Entry


def make_entry(name, extension="txt"):
    return Entry(Archive("/x/a.vpk"), 0x7FFF, None, name, extension, 0, 0, 0, 0xFFFF)


def test_path_is_trimmed():
    assert Directory("  scripts/ai ").path == "scripts/ai"
    assert Directory(" ").path == ""


def test_get_path_for_joins_with_slash():
    directory = Directory("scripts/ai")
    assert directory.get_path_for(make_entry("soldier")) == "scripts/ai/soldier.txt"


def test_get_path_for_root_directory_has_no_leading_slash():
    assert Directory(" ").get_path_for(make_entry("gameinfo")) == "gameinfo.txt"


def test_entries_keep_insertion_order_and_can_be_removed():
    directory = Directory("d")
    first, second, third = make_entry("c"), make_entry("a"), make_entry("b")
    for entry in (first, second, third):
        directory.add_entry(entry)
    assert directory.entries == [first, second, third]

    directory.remove_entry(second)
    assert directory.entries == [first, third]
