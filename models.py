"""models.py — Shared data types for chapter-editor."""

from dataclasses import asdict, dataclass


@dataclass
class SplitResult:
    doctype: str         # "<!DOCTYPE html>" or ""
    head_content: str    # Raw markup between <head ...> and </head>
    body_content: str    # Raw markup between <body ...> and </body>
    is_fragment: bool    # True when the source had no <html>/<body> wrapper


@dataclass(frozen=True)
class ChapterMeta:
    filename: str        # Final path component, e.g. "01-intro.html"
    path: str            # Absolute path
    relative_path: str   # Path from the project root, e.g. "part1/01-intro.html"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ChapterData:
    filename: str
    body_html: str
    css: str
    original_head: str
    is_fragment: bool

    def to_dict(self) -> dict:
        return asdict(self)
