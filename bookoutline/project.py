"""A book project: configuration plus one parsed book per language."""

import logging
from pathlib import Path

from bookoutline.config import AppConfig, load_config
from bookoutline.ingestion.parser import SummaryParser
from bookoutline.models.book import Author, Book, BookMetadata
from bookoutline.models.book_items import BookItems

logger = logging.getLogger(__name__)


class BookProject:
    """Owns the books of a project, keyed by language.

    Only the default language is loaded from the outline today; other
    editions can be registered with :meth:`add_book`.

    Args:
        root: Book root directory.
        config: Resolved configuration. Loaded from ``root`` when None.
    """

    def __init__(self, root: str | Path, config: AppConfig | None = None) -> None:
        self.root = Path(root)
        self.config = config if config is not None else load_config(self.root)
        self.default_language = self.config.book.language
        self._books: dict[str, Book] = {}

    @property
    def languages(self) -> list[str]:
        return list(self._books)

    def load(self) -> "BookProject":
        """Parse the outline and (re)build the default-language book.

        The previous tree, if any, is replaced as a whole.

        Raises:
            SummaryIOError: If the outline cannot be read.
            MalformedSummaryError: If the outline is malformed.
        """
        summary_path = self.config.summary_path
        logger.info("Parsing outline %s", summary_path)

        parser = SummaryParser(indent_width=self.config.outline.indent_width)
        items = parser.parse_file(summary_path)
        self.add_book(Book(metadata=self._metadata(), items=items))
        return self

    def add_book(self, book: Book) -> None:
        self._books[book.metadata.language] = book

    def book(self, language: str | None = None) -> Book:
        """Return the book for ``language`` (default language when None).

        Raises:
            KeyError: If no book is loaded for that language.
        """
        key = language or self.default_language
        if key not in self._books:
            raise KeyError(f"No book loaded for language '{key}'")
        return self._books[key]

    def iter(self, language: str | None = None) -> BookItems:
        """Fresh depth-first iterator over a book's items."""
        return self.book(language).iter()

    def _metadata(self) -> BookMetadata:
        book_config = self.config.book
        authors = [Author(name=book_config.author)] if book_config.author else []
        return BookMetadata(
            title=book_config.title,
            authors=authors,
            description=book_config.description,
            language=book_config.language,
        )
