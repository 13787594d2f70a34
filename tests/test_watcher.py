from watchdog.events import DirModifiedEvent, FileCreatedEvent, FileModifiedEvent, FileMovedEvent

from conftest import vpk_entry
from pyvpk.watcher import ArchiveEventHandler


def test_archive_parts_are_recognised(tmp_path):
    handler = ArchiveEventHandler(str(tmp_path / "pak01_dir.vpk"), str(tmp_path / "out"))
    assert handler.is_archive_part(str(tmp_path / "pak01_dir.vpk"))
    assert handler.is_archive_part(str(tmp_path / "pak01_012.vpk"))
    assert not handler.is_archive_part(str(tmp_path / "pak02_012.vpk"))
    assert not handler.is_archive_part(str(tmp_path / "sub" / "pak01_012.vpk"))


def test_single_file_archive_matches_only_itself(tmp_path):
    handler = ArchiveEventHandler(str(tmp_path / "game.vpk"), str(tmp_path / "out"))
    assert handler.is_archive_part(str(tmp_path / "game.vpk"))
    assert not handler.is_archive_part(str(tmp_path / "game_000.vpk"))


def test_modification_triggers_extraction(beep_vpk, tmp_path):
    out = tmp_path / "out"
    handler = ArchiveEventHandler(str(beep_vpk), str(out), cooldown=0)
    handler.on_modified(FileModifiedEvent(str(beep_vpk)))
    assert (out / "sounds" / "beep.txt").read_bytes() == b"ABCD"


def test_cooldown_and_unrelated_events_are_ignored(beep_vpk, tmp_path, monkeypatch):
    handler = ArchiveEventHandler(str(beep_vpk), str(tmp_path / "out"), cooldown=1000)
    calls = []
    monkeypatch.setattr(handler, "extract", lambda: calls.append(1))

    handler.on_modified(DirModifiedEvent(str(tmp_path)))
    handler.on_modified(FileModifiedEvent(str(tmp_path / "other.vpk")))
    handler.on_modified(FileModifiedEvent(str(beep_vpk)))
    handler.on_modified(FileModifiedEvent(str(beep_vpk)))
    assert calls == [1]


def test_broken_archive_is_logged_not_raised(make_vpk, tmp_path, caplog):
    path = make_vpk("broken.vpk", [("txt", [("a", [vpk_entry("b")])])], version=9)
    handler = ArchiveEventHandler(str(path), str(tmp_path / "out"))
    assert handler.extract() == 0
    assert "Failed to extract" in caplog.text


def test_created_and_moved_events_trigger_extraction(beep_vpk, tmp_path, monkeypatch):
    handler = ArchiveEventHandler(str(beep_vpk), str(tmp_path / "out"), cooldown=0)
    calls = []
    monkeypatch.setattr(handler, "extract", lambda: calls.append(1))

    handler.on_created(FileCreatedEvent(str(beep_vpk)))
    handler.on_moved(FileMovedEvent(str(tmp_path / "beep.vpk.tmp"), str(beep_vpk)))
    handler.on_moved(FileMovedEvent(str(beep_vpk), str(tmp_path / "backup.vpk")))
    assert calls == [1, 1]
