"""parsers/html_parser.py — Split HTML chapters into parts and put them back together."""

import logging

from bs4 import BeautifulSoup

from models import SplitResult
from parsers.base import contains_tag, extract_between_tags, extract_doctype

logger = logging.getLogger(__name__)


def split_html(raw: str) -> SplitResult:
    """
    Split a chapter into doctype, head and body.

    Two cases:
      1. Full documents with <html>/<head>/<body> tags: parts are sliced out
         of the source so the markup stays exactly as the author wrote it.
      2. Body-only fragments (no <html> or <body> tag): returned untouched.
    """
    if not contains_tag(raw, "<html") and not contains_tag(raw, "<body"):
        return SplitResult(doctype="", head_content="", body_content=raw, is_fragment=True)

    head = extract_between_tags(raw, "head")
    if head is None:
        logger.debug("No <head> element found, using empty head")
        head = ""

    return SplitResult(
        doctype=extract_doctype(raw),
        head_content=head,
        body_content=_extract_body(raw),
        is_fragment=False,
    )


def reassemble_html(doctype: str, head: str, body: str, is_fragment: bool) -> str:
    """Build a full document from its parts. Fragments come back as the body alone."""
    if is_fragment:
        return body

    parts = []
    if doctype:
        parts.append(doctype + "\n")
    parts.append("<html>\n<head>\n")
    parts.append(head if head.endswith("\n") else head + "\n")
    parts.append("</head>\n<body>\n")
    parts.append(body if body.endswith("\n") else body + "\n")
    parts.append("</body>\n</html>\n")
    return "".join(parts)


def _extract_body(raw: str) -> str:
    """Slice the body out verbatim; fall back to a tolerant parse, then to the raw input."""
    body = extract_between_tags(raw, "body")
    if body is not None:
        return body

    # The parser re-serialises markup, so this path is not verbatim.
    logger.warning("Could not slice <body>, falling back to tolerant HTML parse")
    soup = BeautifulSoup(raw, features="lxml")
    if soup.body is not None:
        return soup.body.decode_contents()

    logger.warning("No <body> element after parsing, returning whole document as body")
    return raw
