import os
import sys

from dotenv import load_dotenv

from .archive import Archive
from .errors import VPKError
from .extractor import extract_archive, iter_entries, read_entry
from .logging_utils import configure_logging, get_logger
from .watcher import run_watcher

logger = get_logger(__name__)

DEFAULT_OUTPUT_DIR = "./extracted"
DEFAULT_WATCH_COOLDOWN = 10.0


def print_usage(prog: str) -> None:
    print("pyvpk - A utility for reading and unpacking .vpk archives.", file=sys.stderr)
    print("\nUsage:", file=sys.stderr)
    print("  To unpack all files from an archive:", file=sys.stderr)
    print(f"    {prog} unpack <input_vpk_file> [output_folder] [-v]", file=sys.stderr)
    print("\n  To unpack specific files matching patterns:", file=sys.stderr)
    print(f"    {prog} unpack_one <input_vpk_file> <output_folder> [file_pattern1] [pattern2] ...", file=sys.stderr)
    print("\n  To show a single file's content in the console (unpack to memory):", file=sys.stderr)
    print(f"    {prog} show <input_vpk_file> <filename_in_vpk>", file=sys.stderr)
    print("\n  To list every file in an archive:", file=sys.stderr)
    print(f"    {prog} list <input_vpk_file>", file=sys.stderr)
    print("\n  To re-extract an archive whenever it changes:", file=sys.stderr)
    print(f"    {prog} watch <input_vpk_file> [output_folder]", file=sys.stderr)


def load_archive(path: str, verbose: bool = False) -> Archive:
    archive = Archive(os.path.abspath(path))
    logger.info("Loading archive %s...", path)
    archive.load()
    if verbose:
        logger.info("\t%s", archive.name)
        logger.info("\tSignature: 0x%08X", archive.signature)
        logger.info("\tVersion: %d", archive.version)
        logger.info("\tDirectories: %d", len(archive.directories))
    return archive


def run(args: list[str], prog: str = "pyvpk") -> int:
    verbose = any(a in ("-v", "--verbose") for a in args)
    args = [a for a in args if a not in ("-v", "--verbose")]
    if len(args) < 2:
        print_usage(prog)
        return 1

    command, archive_path = args[0], args[1]
    output_dir = os.getenv("PYVPK_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)

    try:
        if command == "unpack" and len(args) in (2, 3):
            archive = load_archive(archive_path, verbose)
            logger.info("Extracting all entries...")
            extract_archive(archive, args[2] if len(args) == 3 else output_dir, verbose=verbose)
        elif command == "unpack_one" and len(args) >= 4:
            archive = load_archive(archive_path, verbose)
            extract_archive(archive, args[2], patterns=args[3:], verbose=verbose)
        elif command == "show" and len(args) == 3:
            archive = load_archive(archive_path, verbose)
            content = read_entry(archive, args[2])
            if content is None:
                return 1
            # Write binary data directly to standard output
            sys.stdout.buffer.write(content)
            sys.stdout.buffer.flush()
        elif command == "list" and len(args) == 2:
            archive = load_archive(archive_path, verbose)
            for directory, entry in iter_entries(archive):
                print(directory.get_path_for(entry))
        elif command == "watch" and len(args) in (2, 3):
            raw_cooldown = os.getenv("PYVPK_WATCH_COOLDOWN", str(DEFAULT_WATCH_COOLDOWN))
            try:
                cooldown = float(raw_cooldown)
            except ValueError:
                logger.error("PYVPK_WATCH_COOLDOWN must be a number of seconds, got %r", raw_cooldown)
                return 1
            run_watcher(archive_path, args[2] if len(args) == 3 else output_dir, cooldown=cooldown)
        else:
            logger.error("Invalid command or arguments for '%s'.", command)
            print_usage(prog)
            return 1
    except (VPKError, OSError) as exc:
        logger.error("Error during extraction: %s", exc)
        return 1
    return 0


def main() -> None:
    load_dotenv()
    configure_logging()
    sys.exit(run(sys.argv[1:], prog=os.path.basename(sys.argv[0])))


if __name__ == "__main__":
    main()
