"""Plain-text table of contents."""

from bookoutline.models.book import Book
from bookoutline.models.book_item import AffixItem, ChapterItem, SpacerItem

INDENT = "  "
SPACER_LINE = "---"


def format_toc(book: Book) -> list[str]:
    """Render one line per outline entry, numbered and indented by depth.

    Example output::

        Preface
        1. Getting Started
          1.1. Installation
        ---
        Appendix
    """
    lines: list[str] = []
    items = book.iter()
    for label, item in items:
        prefix = INDENT * items.depth
        if isinstance(item, SpacerItem):
            lines.append(prefix + SPACER_LINE)
        elif isinstance(item, (ChapterItem, AffixItem)):
            number = f"{label}. " if label is not None else ""
            lines.append(f"{prefix}{number}{item.chapter.name}")
    return lines
