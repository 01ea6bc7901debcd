"""Book data model."""

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field

from bookoutline.models.book_item import AffixItem, BookItem, ChapterItem
from bookoutline.models.book_items import BookItems


class Author(BaseModel):
    """A book author."""

    name: str
    email: str | None = None


class BookMetadata(BaseModel):
    """Descriptive metadata for one language edition of a book."""

    title: str = ""
    authors: list[Author] = Field(default_factory=list)
    description: str = ""
    language: str = "en"


class Book(BaseModel):
    """A book: its metadata and the item tree parsed from its outline.

    Immutable once built; reloading a project replaces the book as a whole.
    """

    model_config = ConfigDict(frozen=True)

    metadata: BookMetadata = Field(default_factory=BookMetadata)
    items: tuple[BookItem, ...] = ()

    def iter(self) -> BookItems:
        """Return a fresh depth-first iterator over the book's items.

        Each call starts from the beginning; iterators do not share state.
        """
        return BookItems(self.items)

    def chapters(self) -> Iterator[tuple[str | None, ChapterItem | AffixItem]]:
        """Yield ``(label, item)`` for every chapter and affix, skipping spacers."""
        for label, item in self.iter():
            if isinstance(item, (ChapterItem, AffixItem)):
                yield label, item
