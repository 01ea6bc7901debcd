"""Custom exceptions for bookoutline."""

from pathlib import Path


class BookOutlineError(Exception):
    """Base exception for bookoutline operations."""


class SummaryParseError(BookOutlineError):
    """The outline document could not be turned into a book item tree."""


class SummaryIOError(SummaryParseError):
    """The outline document could not be read."""

    def __init__(self, path: str | Path, cause: OSError | None = None) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Unable to read outline {self.path}{detail}")


class MalformedSummaryError(SummaryParseError):
    """A line of the outline violates its structure.

    Attributes:
        line: 1-based line number of the offending line.
        text: The raw text of that line.
        reason: Short description of the violation.
    """

    def __init__(self, line: int, text: str, reason: str) -> None:
        self.line = line
        self.text = text
        self.reason = reason
        super().__init__(f"line {line}: {reason}: {text!r}")


class ConfigError(BookOutlineError):
    """The project configuration is missing, unreadable or invalid."""

    def __init__(self, path: str | Path | None, message: str) -> None:
        self.path = Path(path) if path is not None else None
        location = f" {self.path}" if self.path is not None else ""
        super().__init__(f"Invalid configuration{location}: {message}")
