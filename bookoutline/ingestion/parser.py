"""Outline (SUMMARY.md) parser producing the book item tree."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import unquote

import chardet

from bookoutline.exceptions import MalformedSummaryError, SummaryIOError
from bookoutline.models.book_item import AffixItem, BookItem, Chapter, ChapterItem, SpacerItem

logger = logging.getLogger(__name__)

TAB_WIDTH = 4

HEADING_RE = re.compile(r"^ {0,3}#")
SEPARATOR_RE = re.compile(r"^(?P<indent> *)(?:(?:-[ ]*){2,}|(?:\*[ ]*){3,}|(?:_[ ]*){3,})$")
LIST_ITEM_RE = re.compile(r"^(?P<indent> *)(?:[-*+]|\d{1,9}[.)])[ ]+(?P<content>.*)$")
BARE_LINK_RE = re.compile(r"^(?P<indent> *)(?P<content>\[.*)$")
LINK_RE = re.compile(
    r"^\[(?P<name>(?:\\.|[^\\\]])+)\]\((?P<target><[^<>]*>|[^\s()]*)\)$"
)
ESCAPE_RE = re.compile(r"\\(.)")

# Titles that mark a top-level entry after a separator as back matter.
BACK_MATTER_TITLES: tuple[str, ...] = (
    "appendix",
    "appendices",
    "glossary",
    "index",
    "bibliography",
    "references",
    "acknowledgements",
    "acknowledgments",
    "afterword",
    "colophon",
    "credits",
    "license",
)


def is_back_matter_title(name: str) -> bool:
    """Return True if a chapter name reads like back matter ("Appendix A", "Glossary")."""
    normalized = name.lower().strip()
    for title in BACK_MATTER_TITLES:
        if normalized == title or normalized.startswith(f"{title} ") or normalized.startswith(f"{title}:"):
            return True
    return False


@dataclass
class _OpenEntry:
    """A chapter or affix whose children are still being read."""

    name: str
    path: Path | None
    affix: bool
    numbered: bool
    label: str = ""
    children: list[BookItem] = field(default_factory=list)
    child_count: int = 0

    def close(self) -> BookItem:
        chapter = Chapter(name=self.name, path=self.path, sub_items=tuple(self.children))
        if self.affix:
            return AffixItem(chapter=chapter)
        return ChapterItem(label=self.label, chapter=chapter)


@dataclass
class _ParseState:
    indent_width: int
    roots: list[BookItem] = field(default_factory=list)
    stack: list[_OpenEntry] = field(default_factory=list)
    chapter_count: int = 0
    after_separator: bool = False
    back_matter: bool = False


class SummaryParser:
    """Parses an outline document into a list of book items.

    The outline is a Markdown list of links::

        # Summary

        [Preface](preface.md)

        - [Chapter 1](ch1.md)
          - [Section](ch1/section.md)
        - [Chapter 2](ch2.md)

        ---

        - [Appendix](appendix.md)

    Recognised lines are headings (ignored), separators (``---``), list
    items holding exactly one link, and unindented bare links. Front and
    back matter are decided by position:

    - a bare link before the first numbered chapter is front matter;
    - a bare link after a numbered chapter starts the back matter;
    - a top-level list item that follows a separator and whose title
      reads as back matter (see :data:`BACK_MATTER_TITLES`) starts the
      back matter as well;
    - once the back matter has started, another numbered chapter is an
      error.

    Nested items inherit the numbering of their parent; anything below an
    affix is un-numbered. Separators never hold children.

    Args:
        indent_width: Spaces per nesting level. When None, the indentation of the first
            indented list item or separator is used for the whole document. A leading
            tab always counts as one level.
    """

    def __init__(self, indent_width: int | None = None) -> None:
        if indent_width is not None and indent_width < 1:
            raise ValueError(f"indent_width must be positive, got {indent_width}")
        self._indent_width = indent_width

    def parse(self, text: str) -> list[BookItem]:
        """Parse outline text into the top-level book items.

        Args:
            text: Full text of the outline document.

        Returns:
            Top-level items in document order.

        Raises:
            MalformedSummaryError: If a line breaks the outline structure.
        """
        lines = text.lstrip("\ufeff").splitlines()
        state = _ParseState(indent_width=self._indent_width or _infer_indent_width(lines))

        for line_no, raw in enumerate(lines, start=1):
            line = _expand_indent(raw, state.indent_width).rstrip()
            if not line or HEADING_RE.match(line):
                continue

            separator = SEPARATOR_RE.match(line)
            if separator is not None:
                depth = self._open_depth(state, len(separator.group("indent")), line_no, raw)
                self._add_separator(state, depth)
                continue

            list_item = LIST_ITEM_RE.match(line)
            if list_item is not None:
                name, path = self._parse_link(list_item.group("content"), line_no, raw)
                depth = self._open_depth(state, len(list_item.group("indent")), line_no, raw)
                self._add_list_item(state, depth, name, path, line_no, raw)
                continue

            bare_link = BARE_LINK_RE.match(line)
            if bare_link is not None:
                name, path = self._parse_link(bare_link.group("content"), line_no, raw)
                if bare_link.group("indent"):
                    raise MalformedSummaryError(line_no, raw, "prefix and suffix links must not be indented")
                self._close_to(state, 0)
                self._add_affix(state, name, path)
                continue

            raise MalformedSummaryError(line_no, raw, "expected a list item with a link, a link or a separator")

        self._close_to(state, 0)
        logger.debug(
            "Parsed outline: %d lines, %d top-level items, %d numbered chapters",
            len(lines),
            len(state.roots),
            state.chapter_count,
        )
        return state.roots

    def parse_file(self, file_path: str | Path) -> list[BookItem]:
        """Read and parse an outline document.

        Raises:
            SummaryIOError: If the file is missing or cannot be read.
            MalformedSummaryError: If a line breaks the outline structure.
        """
        path = Path(file_path)
        try:
            text = read_text(path)
        except OSError as exc:
            raise SummaryIOError(path, exc) from exc
        return self.parse(text)

    def _parse_link(self, content: str, line_no: int, raw: str) -> tuple[str, Path | None]:
        match = LINK_RE.match(content.strip())
        if match is None:
            raise MalformedSummaryError(line_no, raw, "expected a single link of the form [name](path)")

        name = ESCAPE_RE.sub(r"\1", match.group("name")).strip()
        if not name:
            raise MalformedSummaryError(line_no, raw, "link has no name")

        target = match.group("target")
        if target.startswith("<"):
            target = target[1:-1]
        target = unquote(target.strip())
        return name, Path(target) if target else None

    def _open_depth(self, state: _ParseState, indent: int, line_no: int, raw: str) -> int:
        """Convert indentation to a nesting depth and close entries above it."""
        if indent == 0:
            depth = 0
        else:
            if indent % state.indent_width:
                raise MalformedSummaryError(
                    line_no,
                    raw,
                    f"indentation is not a multiple of {state.indent_width} spaces",
                )
            depth = indent // state.indent_width

        if depth > len(state.stack):
            raise MalformedSummaryError(line_no, raw, "item is indented deeper than any open parent")
        self._close_to(state, depth)
        return depth

    def _close_to(self, state: _ParseState, depth: int) -> None:
        while len(state.stack) > depth:
            entry = state.stack.pop()
            self._attach(state, entry.close())

    def _attach(self, state: _ParseState, item: BookItem) -> None:
        if state.stack:
            state.stack[-1].children.append(item)
        else:
            state.roots.append(item)

    def _add_separator(self, state: _ParseState, depth: int) -> None:
        self._attach(state, SpacerItem())
        if depth == 0:
            state.after_separator = True

    def _add_affix(self, state: _ParseState, name: str, path: Path | None) -> None:
        if state.chapter_count:
            state.back_matter = True
        state.stack.append(_OpenEntry(name=name, path=path, affix=True, numbered=False))

    def _add_list_item(
        self,
        state: _ParseState,
        depth: int,
        name: str,
        path: Path | None,
        line_no: int,
        raw: str,
    ) -> None:
        if depth > 0:
            parent = state.stack[-1]
            if parent.numbered:
                parent.child_count += 1
                entry = _OpenEntry(
                    name=name,
                    path=path,
                    affix=False,
                    numbered=True,
                    label=f"{parent.label}.{parent.child_count}",
                )
            else:
                entry = _OpenEntry(name=name, path=path, affix=False, numbered=False)
            state.stack.append(entry)
            return

        starts_back_matter = state.chapter_count > 0 and state.after_separator and is_back_matter_title(name)
        if starts_back_matter or (state.back_matter and is_back_matter_title(name)):
            self._add_affix(state, name, path)
            return
        if state.back_matter:
            raise MalformedSummaryError(line_no, raw, "numbered chapter after back matter")

        state.chapter_count += 1
        state.after_separator = False
        state.stack.append(
            _OpenEntry(name=name, path=path, affix=False, numbered=True, label=str(state.chapter_count))
        )


def _expand_indent(raw: str, indent_width: int) -> str:
    """Expand leading tabs to one indentation level each, other tabs to TAB_WIDTH."""
    body = raw.lstrip(" \t")
    leading = raw[: len(raw) - len(body)]
    return leading.replace("\t", " " * indent_width) + body.expandtabs(TAB_WIDTH)


def _infer_indent_width(lines: list[str]) -> int:
    """Take the indentation step from the first indented list item or separator."""
    for raw in lines:
        line = _expand_indent(raw, TAB_WIDTH).rstrip()
        match = SEPARATOR_RE.match(line) or LIST_ITEM_RE.match(line)
        if match is None or not match.group("indent"):
            continue
        # a tab is one level whatever the step, so it cannot set one
        if "\t" in raw[: len(raw) - len(raw.lstrip(" \t"))]:
            width = TAB_WIDTH
        else:
            width = len(match.group("indent"))
        logger.debug("Inferred outline indentation of %d spaces from line: %r", width, raw)
        return width
    return TAB_WIDTH


def read_text(file_path: Path) -> str:
    """Read a text file, detecting the encoding when it is not UTF-8.

    Raises:
        OSError: If the file cannot be read.
    """
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        pass

    raw_bytes = file_path.read_bytes()
    detected = chardet.detect(raw_bytes)
    encoding = detected.get("encoding") or "utf-8"
    confidence = detected.get("confidence", 0)

    if confidence < 0.7:
        logger.warning(
            "Low confidence encoding detection for %s: %s (%.0f%%)",
            file_path,
            encoding,
            confidence * 100,
        )

    try:
        return raw_bytes.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        logger.error("Failed to decode file as %s, replacing invalid bytes: %s", encoding, file_path)
        return raw_bytes.decode("utf-8", errors="replace")


def parse_summary(text: str, indent_width: int | None = None) -> list[BookItem]:
    """Parse outline text with a default :class:`SummaryParser`."""
    return SummaryParser(indent_width=indent_width).parse(text)
