"""Checks over a parsed book that read, but never write, the source tree."""

import logging
from pathlib import Path

from bookoutline.models.book import Book

logger = logging.getLogger(__name__)


def missing_chapter_files(book: Book, src_dir: str | Path) -> list[Path]:
    """List chapter files referenced by the outline that do not exist.

    Chapters without a path are skipped. A file referenced several times
    is reported once, at its first position.

    Args:
        book: Parsed book.
        src_dir: Source directory the chapter paths are relative to.

    Returns:
        Missing files in outline order.
    """
    src = Path(src_dir)
    missing: list[Path] = []
    seen: set[Path] = set()

    for _, item in book.chapters():
        path = item.chapter.path
        if path is None or path in seen:
            continue
        seen.add(path)

        full_path = src / path
        if not full_path.is_file():
            logger.debug("Missing chapter file for '%s': %s", item.chapter.name, full_path)
            missing.append(full_path)

    return missing
