"""parsers/base.py — Shared tag-slicing helpers.

Searches are case-insensitive on the literal tag text and return indices
into the original string, so sliced content keeps its exact characters.
"""

import re


def find_tag(raw: str, literal: str, start: int = 0) -> int:
    """Return the index of the first case-insensitive `literal` at or after `start`, or -1."""
    m = re.compile(re.escape(literal), re.IGNORECASE).search(raw, start)
    return m.start() if m else -1


def contains_tag(raw: str, literal: str) -> bool:
    return find_tag(raw, literal) != -1


def extract_doctype(raw: str) -> str:
    """Return '<!doctype ...>' exactly as written, or '' if absent."""
    start = find_tag(raw, "<!doctype")
    if start == -1:
        return ""
    end = raw.find(">", start)
    if end == -1:
        return ""
    return raw[start:end + 1]


def extract_between_tags(raw: str, tag: str) -> str | None:
    """
    Return the raw content between the first `<tag ...>` and the next `</tag>`.

    Matches the literal prefix `<tag`, so `<headless-x>` counts as a `<head`
    opening tag. Returns None when either tag is missing.
    """
    open_start = find_tag(raw, f"<{tag}")
    if open_start == -1:
        return None
    open_end = raw.find(">", open_start)
    if open_end == -1:
        return None
    content_start = open_end + 1

    close_start = find_tag(raw, f"</{tag}>", content_start)
    if close_start == -1:
        return None
    return raw[content_start:close_start]
