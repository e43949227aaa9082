"""project.py — Chapter discovery and file I/O inside a project folder."""

import logging
import os
import shutil
from pathlib import Path

from models import ChapterMeta

logger = logging.getLogger(__name__)

CHAPTER_EXTENSIONS = {".html", ".htm"}

# Checked in order; the first readable one wins.
CSS_CANDIDATES = [
    "book.css",
    "style.css",
    "styles.css",
    "css/book.css",
    "styles/book.css",
]

BACKUP_SUFFIX = ".html.bak"
TEMP_SUFFIX = ".html.tmp"


def list_html_files(root_dir: Path) -> list[ChapterMeta]:
    """
    Recursively list .html/.htm files under root_dir, sorted by relative path
    so chapters group by folder, then filename.

    Raises OSError if any directory cannot be read.
    """
    root_dir = Path(root_dir)
    chapters: list[ChapterMeta] = []
    _collect_html_files(root_dir, root_dir, chapters)
    chapters.sort(key=lambda ch: ch.relative_path)
    logger.debug("Found %d chapter files under %s", len(chapters), root_dir)
    return chapters


def _collect_html_files(root: Path, directory: Path, chapters: list[ChapterMeta]) -> None:
    for entry in directory.iterdir():
        if entry.is_dir():
            _collect_html_files(root, entry, chapters)
            continue
        if entry.is_file() and entry.suffix.lower() in CHAPTER_EXTENSIONS:
            chapters.append(ChapterMeta(
                filename=entry.name,
                path=str(entry.absolute()),
                relative_path=str(entry.relative_to(root)),
            ))


def read_css(root_dir: Path) -> str:
    """Return the project's shared stylesheet, or '' if there isn't one."""
    root_dir = Path(root_dir)
    for candidate in CSS_CANDIDATES:
        css_path = root_dir / candidate
        try:
            return read_text(css_path)
        except (OSError, UnicodeDecodeError):
            continue
    return ""


def read_text(path: Path) -> str:
    """Read a UTF-8 file exactly as stored (no newline translation)."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def sibling_path(path: Path, suffix: str) -> Path:
    """'ch1.htm' + '.html.bak' -> 'ch1.html.bak' (replaces the last extension)."""
    path = Path(path)
    return path.with_name(path.stem + suffix)


def atomic_write(path: Path, content: str, temp_suffix: str = TEMP_SUFFIX) -> None:
    """
    Write content to a sibling temp file, then rename it over path.

    If either step fails the target keeps its old content and the temp file
    is removed before the error propagates. A failed rename is re-raised
    with a message naming the rename step.
    """
    path = Path(path)
    tmp_path = sibling_path(path, temp_suffix)

    try:
        with open(tmp_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except (OSError, UnicodeEncodeError):
        tmp_path.unlink(missing_ok=True)
        raise

    try:
        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise OSError(f"could not rename {tmp_path.name} over target: {e}") from e
    logger.info("Wrote %s (%d chars)", path, len(content))


def create_backup(path: Path, backup_suffix: str = BACKUP_SUFFIX) -> Path:
    """Copy path to its .bak sibling and return the backup path."""
    backup_path = sibling_path(path, backup_suffix)
    shutil.copy2(path, backup_path)
    return backup_path
