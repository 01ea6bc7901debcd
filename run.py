"""Entry point for the bookoutline command line."""

import argparse
import logging
import sys
from pathlib import Path

from bookoutline.config import load_config
from bookoutline.exceptions import ConfigError, SummaryParseError
from bookoutline.project import BookProject
from bookoutline.toc import format_toc
from bookoutline.validation import missing_chapter_files

logger = logging.getLogger("bookoutline")

EXIT_PARSE_ERROR = 1
EXIT_MISSING_FILES = 2
EXIT_CONFIG_ERROR = 3


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect the outline of a Markdown book.")
    parser.add_argument(
        "command",
        choices=["toc", "check"],
        help="toc: print the numbered outline; check: report missing chapter files.",
    )
    parser.add_argument("root", nargs="?", type=Path, default=Path("."), help="Book root directory.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file. Defaults to book.yaml in the root.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def run_cli(argv: list[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.root, config_path=args.config)
    except ConfigError as exc:
        print(f"Failed to load configuration: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        project = BookProject(args.root, config).load()
    except SummaryParseError as exc:
        print(f"Failed to parse outline: {exc}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    book = project.book()
    if args.command == "toc":
        if book.metadata.title:
            print(book.metadata.title)
            print("=" * len(book.metadata.title))
        for line in format_toc(book):
            print(line)
        return 0

    missing = missing_chapter_files(book, config.book.src)
    for path in missing:
        print(f"missing: {path}")
    if missing:
        logger.warning("%d chapter file(s) missing", len(missing))
        return EXIT_MISSING_FILES
    print("All chapter files present.")
    return 0


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
