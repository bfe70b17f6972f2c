# main.py
import json
import logging
import sys
from typing import Optional

from .api_adapter import ApiAdapter
from .config import get_settings
from .exceptions import ApiStorageError
from .filesystem import Filesystem


def setup_logging():
    """Configures logging to file and console explicitly."""
    settings = get_settings()
    log_level_name = settings.LOG_LEVEL.upper()

    # Get the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level_name)

    # Clear any existing handlers to prevent duplicate logs on re-runs or implicit configs
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Console goes to stderr so command output on stdout stays clean
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    try:
        file_handler = logging.FileHandler(settings.LOG_FILE)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    except IOError as e:
        root_logger.error(f"Failed to set up file logging to {settings.LOG_FILE}: {e}")

    logging.getLogger("urllib3").setLevel(logging.WARNING)


def initialize_adapter(settings) -> ApiAdapter:
    """Builds the API adapter from the application settings."""
    logging.info(f"Using remote storage API at {settings.API_BASE_URL}.")
    return ApiAdapter(
        base_url=settings.API_BASE_URL,
        timeout=settings.API_TIMEOUT_SECONDS,
        verify=settings.API_VERIFY_SSL,
    )


def _print_result(result):
    if isinstance(result, (dict, list)):
        print(json.dumps(result, indent=2))
    else:
        print(result)


def run_command(filesystem: Filesystem, args) -> int:
    """Executes a single parsed CLI command against the filesystem."""
    try:
        if args.command == "read":
            _print_result(filesystem.read(args.path))
        elif args.command == "write":
            _print_result(filesystem.put(args.path, args.contents))
        elif args.command == "delete":
            _print_result(filesystem.delete(args.path))
        elif args.command == "has":
            _print_result(filesystem.has(args.path))
        elif args.command == "ls":
            _print_result(filesystem.list_contents(args.directory, args.recursive))
        elif args.command == "meta":
            _print_result(filesystem.get_metadata(args.path))
        elif args.command == "mkdir":
            _print_result(filesystem.create_dir(args.dirname))
        elif args.command == "rmdir":
            _print_result(filesystem.delete_dir(args.dirname))
        elif args.command == "rename":
            _print_result(filesystem.rename(args.path, args.newpath))
        elif args.command == "copy":
            _print_result(filesystem.copy(args.path, args.newpath))
    except ApiStorageError as e:
        logging.error(f"Command '{args.command}' failed: {e}")
        return 1
    return 0


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        description="Operate on files stored behind the remote storage API."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in [
        ("read", "Print the contents of a file."),
        ("delete", "Delete a file."),
        ("has", "Check whether a file exists."),
        ("meta", "Print the metadata of a file."),
    ]:
        subparser = subparsers.add_parser(name, help=help_text)
        subparser.add_argument("path")

    write_parser = subparsers.add_parser("write", help="Create or overwrite a file.")
    write_parser.add_argument("path")
    write_parser.add_argument("contents")

    ls_parser = subparsers.add_parser("ls", help="List the contents of a directory.")
    ls_parser.add_argument("directory", nargs="?", default="")
    ls_parser.add_argument("--recursive", action="store_true")

    for name, help_text in [
        ("mkdir", "Create a directory."),
        ("rmdir", "Delete a directory."),
    ]:
        subparser = subparsers.add_parser(name, help=help_text)
        subparser.add_argument("dirname")

    for name, help_text in [
        ("rename", "Rename a file."),
        ("copy", "Copy a file."),
    ]:
        subparser = subparsers.add_parser(name, help=help_text)
        subparser.add_argument("path")
        subparser.add_argument("newpath")

    return parser


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging()

    with initialize_adapter(get_settings()) as adapter:
        return run_command(Filesystem(adapter), args)


if __name__ == "__main__":
    sys.exit(main())
