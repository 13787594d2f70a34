import os
import re
import time

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .archive import Archive
from .errors import VPKError
from .extractor import extract_archive
from .logging_utils import get_logger

logger = get_logger(__name__)


class ArchiveEventHandler(FileSystemEventHandler):
    """Re-extract an archive whenever its directory file or one of its parts changes."""

    def __init__(self, archive_path: str, output_dir: str, cooldown: float = 10) -> None:
        self.archive_path = os.path.abspath(archive_path)
        self.output_dir = output_dir
        self.cooldown = cooldown
        self.last_triggered_time = 0.0
        name = os.path.basename(self.archive_path)
        if Archive.MULTI_PART_MARKER in name and len(name) > Archive.MULTI_PART_SUFFIX_LENGTH:
            root = re.escape(name[: -Archive.MULTI_PART_SUFFIX_LENGTH])
            self.part_regex = re.compile(rf"^{root}_(dir|\d{{3}})\.vpk$")
        else:
            self.part_regex = re.compile(rf"^{re.escape(name)}$")

    def is_archive_part(self, src_path: str) -> bool:
        src_path = os.path.abspath(src_path)
        if os.path.dirname(src_path) != os.path.dirname(self.archive_path):
            return False
        return bool(self.part_regex.match(os.path.basename(src_path)))

    def on_modified(self, event) -> None:
        if not event.is_directory:
            self.handle_change(os.fsdecode(event.src_path))

    def on_created(self, event) -> None:
        if not event.is_directory:
            self.handle_change(os.fsdecode(event.src_path))

    def on_moved(self, event) -> None:
        # A rename onto an archive part counts as a change to it.
        if not event.is_directory:
            self.handle_change(os.fsdecode(event.dest_path))

    def handle_change(self, src_path: str) -> None:
        if not self.is_archive_part(src_path):
            return
        current_time = time.time()
        if current_time - self.last_triggered_time < self.cooldown:
            return
        self.last_triggered_time = current_time
        logger.info("Detected modification of %s", src_path)
        self.extract()

    def extract(self) -> int:
        archive = Archive(self.archive_path)
        try:
            archive.load()
            return extract_archive(archive, self.output_dir)
        except (VPKError, OSError):
            logger.exception("Failed to extract %s", self.archive_path)
            return 0


def run_watcher(archive_path: str, output_dir: str, cooldown: float = 10) -> None:
    event_handler = ArchiveEventHandler(archive_path, output_dir, cooldown=cooldown)
    watch_dir = os.path.dirname(event_handler.archive_path)
    event_handler.extract()
    logger.info("Starting file monitor on: %s", watch_dir)
    observer = Observer()
    observer.schedule(event_handler, watch_dir, recursive=False)
    observer.start()
    logger.info("Monitor started. Waiting for '%s' modifications...", os.path.basename(archive_path))
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Monitor stopped by user.")
        observer.stop()
    observer.join()
