"""Tests for book projects."""

from pathlib import Path

import pytest

from bookoutline.config import load_config
from bookoutline.exceptions import MalformedSummaryError, SummaryIOError
from bookoutline.models import AffixItem, Book, BookMetadata, ChapterItem, SpacerItem
from bookoutline.project import BookProject

EXPECTED_LABELS = ["1", "1.1", "1.2", "2", "2.1", "2.1.1", "2.2"]


class TestBookProject:
    def test_load_sample_book(self, sample_book_dir: Path) -> None:
        project = BookProject(sample_book_dir).load()
        book = project.book()

        assert project.languages == ["en"]
        assert book.metadata.title == "The Sample Book"
        assert [author.name for author in book.metadata.authors] == ["Ada Writer"]
        assert book.metadata.description == "A small book used by the tests."

    def test_sample_book_labels(self, sample_book_dir: Path) -> None:
        project = BookProject(sample_book_dir).load()
        entries = list(project.iter())

        numbered = [label for label, item in entries if isinstance(item, ChapterItem)]
        assert numbered == EXPECTED_LABELS
        assert isinstance(entries[0][1], AffixItem)
        assert sum(isinstance(item, SpacerItem) for _, item in entries) == 1
        assert [item.chapter.name for _, item in entries[-2:]] == ["Appendix A: Grammar", "Contributors"]
        assert all(label is None for label, item in entries if not isinstance(item, ChapterItem))

    def test_draft_chapter_has_no_path(self, sample_book_dir: Path) -> None:
        book = BookProject(sample_book_dir).load().book()
        drafts = [item.chapter.name for _, item in book.chapters() if item.chapter.path is None]
        assert drafts == ["Planned Topics"]

    def test_reload_rebuilds_tree(self, sample_book_dir: Path) -> None:
        project = BookProject(sample_book_dir).load()
        first = project.book()
        second = project.load().book()
        assert first is not second
        assert first == second

    def test_missing_summary(self, tmp_path: Path) -> None:
        with pytest.raises(SummaryIOError):
            BookProject(tmp_path).load()

    def test_malformed_summary(self, tmp_path: Path) -> None:
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "SUMMARY.md").write_text("- [A](a.md)\n  - [B](b.md)\n      - [C](c.md)\n")
        with pytest.raises(MalformedSummaryError) as excinfo:
            BookProject(tmp_path).load()
        assert excinfo.value.line == 3

    def test_configured_indent_width(self, tmp_path: Path) -> None:
        (tmp_path / "book.yaml").write_text("outline:\n  indent_width: 4\n")
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "SUMMARY.md").write_text("- [A](a.md)\n  - [B](b.md)\n")
        with pytest.raises(MalformedSummaryError):
            BookProject(tmp_path).load()

    def test_unknown_language(self, sample_book_dir: Path) -> None:
        project = BookProject(sample_book_dir).load()
        with pytest.raises(KeyError):
            project.book("fr")

    def test_add_book_for_another_language(self, sample_book_dir: Path) -> None:
        project = BookProject(sample_book_dir, load_config(sample_book_dir)).load()
        project.add_book(Book(metadata=BookMetadata(title="Le Livre", language="fr")))

        assert project.languages == ["en", "fr"]
        assert project.book("fr").metadata.title == "Le Livre"
        assert project.book().metadata.title == "The Sample Book"
