"""Shared fixtures for bookoutline tests."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_BOOK_DIR = FIXTURES_DIR / "sample_book"


@pytest.fixture(autouse=True)
def clean_book_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep directory overrides, including ones loaded from .env files, out of other tests."""
    for name in ("BOOK_SRC_DIR", "BOOK_DEST_DIR"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def sample_book_dir() -> Path:
    return SAMPLE_BOOK_DIR
