"""Book item tree data model."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Chapter(BaseModel):
    """Payload shared by numbered chapters and affixes.

    ``path`` is relative to the book's source directory. ``None`` marks a
    chapter with no backing file: it is still listed and numbered, but no
    content is read for it and nothing is ever created for it on disk.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path | None = None
    sub_items: tuple[BookItem, ...] = ()

    @property
    def has_content(self) -> bool:
        return self.path is not None

    @property
    def is_leaf(self) -> bool:
        return len(self.sub_items) == 0


class ChapterItem(BaseModel):
    """A numbered chapter.

    ``label`` is the section number assigned while parsing ("1", "2.1"),
    or an empty string below an affix. Consumers should use the label
    produced by :class:`~bookoutline.models.book_items.BookItems`.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["chapter"] = "chapter"
    label: str = ""
    chapter: Chapter


class AffixItem(BaseModel):
    """Front or back matter; excluded from numbering along with its subtree."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["affix"] = "affix"
    chapter: Chapter


class SpacerItem(BaseModel):
    """A visual separator with no content and no children."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["spacer"] = "spacer"


BookItem = Annotated[ChapterItem | AffixItem | SpacerItem, Field(discriminator="kind")]

Chapter.model_rebuild()
ChapterItem.model_rebuild()
AffixItem.model_rebuild()


def chapter_of(item: BookItem) -> Chapter | None:
    """Return the chapter payload of an item, or None for a spacer."""
    if isinstance(item, (ChapterItem, AffixItem)):
        return item.chapter
    if isinstance(item, SpacerItem):
        return None
    raise TypeError(f"Not a book item: {item!r}")
