"""commands.py — Editor commands called by the host (GUI or CLI).

Each command turns library errors into a ChapterEditorError subclass whose
message names the file and the underlying problem, ready to show the user.
"""

import logging
import webbrowser
from pathlib import Path

from backup import BackupTracker
from models import ChapterData, ChapterMeta
from parsers.html_parser import reassemble_html, split_html
from project import (
    BACKUP_SUFFIX,
    TEMP_SUFFIX,
    atomic_write,
    list_html_files,
    read_css,
    read_text,
)

logger = logging.getLogger(__name__)

MARKDOWN_BACKUP_SUFFIX = ".md.bak"
MARKDOWN_TEMP_SUFFIX = ".md.tmp"


class ChapterEditorError(Exception):
    """Base class for errors reported back to the host."""


class ProjectDirectoryError(ChapterEditorError):
    """Raised when the project root is missing or not a directory."""


class FileReadError(ChapterEditorError):
    pass


class FileWriteError(ChapterEditorError):
    pass


class BackupError(ChapterEditorError):
    pass


class ExternalOpenError(ChapterEditorError):
    """Raised when a file cannot be opened in the default viewer."""


def list_chapters(project_dir: str) -> list[ChapterMeta]:
    """List HTML chapter files in the project directory."""
    directory = Path(project_dir)
    if not directory.is_dir():
        raise ProjectDirectoryError(f"Not a directory: {project_dir}")
    try:
        return list_html_files(directory)
    except OSError as e:
        raise FileReadError(f"Failed to list chapters: {e}") from e


def read_chapter(file_path: str, project_dir: str) -> ChapterData:
    """Read a chapter and split it into editable body, original head and project CSS."""
    path = Path(file_path)
    raw_html = _read(path)
    split = split_html(raw_html)

    return ChapterData(
        filename=path.name or "unknown",
        body_html=split.body_content,
        css=read_css(Path(project_dir)),
        original_head=split.head_content,
        is_fragment=split.is_fragment,
    )


def write_chapter(
    file_path: str,
    body_html: str,
    original_head: str,
    is_fragment: bool,
    tracker: BackupTracker,
) -> None:
    """
    Save edited body HTML back to a chapter, keeping the original head.

    The first save of each file per session leaves a .html.bak copy. Full
    documents take their doctype from the file currently on disk.
    """
    path = Path(file_path)
    logger.debug("Saving %s (fragment=%s)", path, is_fragment)
    _backup(tracker, path)

    if is_fragment:
        output = body_html
    else:
        split = split_html(_read(path))
        output = reassemble_html(split.doctype, original_head, body_html, False)

    _write(path, output)


def export_chapter(file_path: str) -> None:
    """Open a chapter in the default browser."""
    path = Path(file_path)
    if not path.exists():
        raise ExternalOpenError(f"File not found: {file_path}")
    uri = path.resolve().as_uri()
    logger.info("Opening %s", uri)
    try:
        opened = webbrowser.open(uri)
    except webbrowser.Error as e:
        raise ExternalOpenError(f"Failed to open browser: {e}") from e
    if not opened:
        raise ExternalOpenError(f"Failed to open browser: no viewer available for {file_path}")


def read_text_file(file_path: str) -> str:
    """Read any text file (e.g. Markdown notes) as-is."""
    return _read(Path(file_path))


def save_markdown_file(file_path: str, content: str, tracker: BackupTracker) -> None:
    """Save a Markdown file with the same backup and atomic-write rules as chapters."""
    path = Path(file_path)
    _backup(tracker, path, MARKDOWN_BACKUP_SUFFIX)
    _write(path, content, MARKDOWN_TEMP_SUFFIX)


def _read(path: Path) -> str:
    try:
        return read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(f"Failed to read {path}: {e}") from e


def _backup(tracker: BackupTracker, path: Path, backup_suffix: str = BACKUP_SUFFIX) -> None:
    try:
        tracker.backup_if_needed(path, backup_suffix)
    except OSError as e:
        raise BackupError(f"Backup failed for {path}: {e}") from e


def _write(path: Path, content: str, temp_suffix: str = TEMP_SUFFIX) -> None:
    try:
        atomic_write(path, content, temp_suffix)
    except (OSError, UnicodeEncodeError) as e:
        raise FileWriteError(f"Failed to write {path}: {e}") from e
