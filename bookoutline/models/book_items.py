"""Depth-first flattening iterator over a book item tree."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from bookoutline.models.book_item import AffixItem, BookItem, ChapterItem, SpacerItem


@dataclass(slots=True)
class _Frame:
    """Traversal state for one sibling sequence."""

    items: Sequence[BookItem]
    position: int
    parent_label: str | None
    counter: int
    numbered: bool


class BookItems(Iterator[tuple[str | None, BookItem]]):
    """Walk a book item tree in pre-order, yielding ``(label, item)`` pairs.

    Labels are computed during the walk: top-level chapters get ``"1"``,
    ``"2"``..., their children ``"2.1"``, ``"2.2"`` and so on. Affixes,
    spacers and everything nested under an affix yield ``None``.

    The walk keeps its own stack instead of recursing, so it can be paused
    after any item. The tree is only read; create as many iterators over
    the same tree as needed.

    Example:
        >>> for label, item in BookItems(book.items):
        ...     print(label, item)
    """

    def __init__(self, items: Sequence[BookItem]) -> None:
        self._current = _Frame(items=items, position=0, parent_label=None, counter=0, numbered=True)
        self._stack: list[_Frame] = []
        self._depth = 0

    def __iter__(self) -> BookItems:
        return self

    def __next__(self) -> tuple[str | None, BookItem]:
        frame = self._current
        while frame.position >= len(frame.items):
            if not self._stack:
                raise StopIteration
            frame = self._current = self._stack.pop()

        item = frame.items[frame.position]
        frame.position += 1
        self._depth = len(self._stack)

        label: str | None = None
        if isinstance(item, ChapterItem):
            if frame.numbered:
                frame.counter += 1
                label = self._join(frame.parent_label, frame.counter)
            self._descend(item.chapter.sub_items, label, numbered=frame.numbered)
        elif isinstance(item, AffixItem):
            self._descend(item.chapter.sub_items, None, numbered=False)
        elif not isinstance(item, SpacerItem):
            raise TypeError(f"Not a book item: {item!r}")

        return label, item

    @property
    def depth(self) -> int:
        """Nesting depth of the item most recently yielded (0 at top level)."""
        return self._depth

    def _descend(self, children: Sequence[BookItem], label: str | None, numbered: bool) -> None:
        if not children:
            return
        self._stack.append(self._current)
        self._current = _Frame(items=children, position=0, parent_label=label, counter=0, numbered=numbered)

    @staticmethod
    def _join(parent_label: str | None, counter: int) -> str:
        if parent_label is None:
            return str(counter)
        return f"{parent_label}.{counter}"
