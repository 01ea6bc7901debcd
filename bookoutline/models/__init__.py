"""Data models for bookoutline."""

from bookoutline.models.book import Author, Book, BookMetadata
from bookoutline.models.book_item import (
    AffixItem,
    BookItem,
    Chapter,
    ChapterItem,
    SpacerItem,
    chapter_of,
)
from bookoutline.models.book_items import BookItems

__all__ = [
    "AffixItem",
    "Author",
    "Book",
    "BookItem",
    "BookItems",
    "BookMetadata",
    "Chapter",
    "ChapterItem",
    "SpacerItem",
    "chapter_of",
]
