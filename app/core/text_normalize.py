"""Text normalization applied to user content before RAG indexing."""

import re

_HTML_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_html(text: str) -> str:
    """Remove anything that looks like an HTML tag."""
    return _HTML_TAG_RE.sub("", text)


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs (including newlines) to single spaces and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def compact_content(text: str | None) -> str:
    """
    Build the compact content string stored alongside an embedding.

    Tags are stripped before whitespace is collapsed, so markup that
    separated words still leaves a single space between them.

    Args:
        text: Raw content, possibly rich-text HTML from the editor

    Returns:
        Plain single-line text; empty string when nothing is left
    """
    if not text:
        return ""
    return collapse_whitespace(strip_html(text))
