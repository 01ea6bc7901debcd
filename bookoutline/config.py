"""Configuration loader for bookoutline projects."""

import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from bookoutline.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Looked up in order in the book root; JSON is read with the YAML loader.
CONFIG_FILENAMES: tuple[str, ...] = ("book.yaml", "book.yml", "book.json")


class BookConfig(BaseModel):
    """Book metadata and directory layout."""

    title: str = ""
    author: str = ""
    description: str = ""
    language: str = "en"
    src: Path = Path("src")
    dest: Path = Path("book")
    summary_file: str = "SUMMARY.md"


class OutlineConfig(BaseModel):
    """Outline parsing options."""

    indent_width: int | None = None  # None: inferred from the document

    @field_validator("indent_width")
    @classmethod
    def _check_indent_width(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("indent_width must be positive")
        return value


class AppConfig(BaseModel):
    """Root configuration of a book project."""

    book: BookConfig = Field(default_factory=BookConfig)
    outline: OutlineConfig = Field(default_factory=OutlineConfig)

    def resolve(self, root: str | Path) -> "AppConfig":
        """Return a copy with ``src`` and ``dest`` made absolute against ``root``.

        Absolute directories are kept as they are.
        """
        root_path = Path(root)
        book = self.book.model_copy(
            update={
                "src": _resolve_dir(root_path, self.book.src),
                "dest": _resolve_dir(root_path, self.book.dest),
            }
        )
        return self.model_copy(update={"book": book})

    @property
    def summary_path(self) -> Path:
        return self.book.src / self.book.summary_file


def _resolve_dir(root: Path, directory: Path) -> Path:
    if directory.is_absolute():
        return directory
    return root / directory


def find_config_file(root: str | Path) -> Path | None:
    """Return the first config file present in ``root``, if any."""
    for name in CONFIG_FILENAMES:
        candidate = Path(root) / name
        if candidate.exists():
            return candidate
    return None


def load_config(root: str | Path = ".", config_path: str | Path | None = None) -> AppConfig:
    """Load configuration for the book rooted at ``root``.

    Settings come from ``config_path`` or the first of
    :data:`CONFIG_FILENAMES` found in the root. A flat file (``title``,
    ``src``... at the top level, as in ``book.json``) is read as the
    ``book`` section. ``BOOK_SRC_DIR`` and ``BOOK_DEST_DIR`` from the
    environment or a ``.env`` file override the directories.

    Args:
        root: Book root directory.
        config_path: Explicit configuration file.

    Returns:
        Configuration with ``src`` and ``dest`` resolved against ``root``.

    Raises:
        ConfigError: If the configuration file cannot be read (including an
            explicit ``config_path`` that does not exist), is not valid YAML,
            or holds invalid settings.
    """
    root_path = Path(root)
    load_dotenv(root_path / ".env")

    yaml_data: dict = {}
    config_file = Path(config_path) if config_path is not None else find_config_file(root_path)
    if config_file is not None:
        try:
            with open(config_file, encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
        except OSError as exc:
            raise ConfigError(config_file, f"cannot read file ({exc.strerror or exc})") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(config_file, f"not valid YAML ({exc})") from exc
        if not isinstance(yaml_data, dict):
            raise ConfigError(config_file, "expected a mapping at the top level")
        logger.debug("Loaded configuration from %s", config_file)

    if yaml_data and not {"book", "outline"} & set(yaml_data):
        yaml_data = {"book": yaml_data}

    try:
        config = AppConfig(**yaml_data)
    except ValidationError as exc:
        raise ConfigError(config_file, str(exc)) from exc

    src_override = os.getenv("BOOK_SRC_DIR")
    dest_override = os.getenv("BOOK_DEST_DIR")
    if src_override:
        config.book.src = Path(src_override)
    if dest_override:
        config.book.dest = Path(dest_override)

    return config.resolve(root_path)
