"""Tests for the plain-text table of contents."""

from pathlib import Path

from bookoutline.ingestion.parser import parse_summary
from bookoutline.models import Book
from bookoutline.project import BookProject
from bookoutline.toc import format_toc


class TestFormatToc:
    def test_sample_book(self, sample_book_dir: Path) -> None:
        book = BookProject(sample_book_dir).load().book()
        assert format_toc(book) == [
            "Preface",
            "1. Getting Started",
            "  1.1. Installation",
            "  1.2. First Steps",
            "2. Reference",
            "  2.1. Configuration",
            "    2.1.1. Outline Options",
            "  2.2. Planned Topics",
            "---",
            "Appendix A: Grammar",
            "Contributors",
        ]

    def test_affix_children_are_indented_without_numbers(self) -> None:
        book = Book(items=parse_summary("[Preface](preface.md)\n  - [Thanks](thanks.md)\n- [One](one.md)\n"))
        assert format_toc(book) == ["Preface", "  Thanks", "1. One"]

    def test_empty_book(self) -> None:
        assert format_toc(Book()) == []
