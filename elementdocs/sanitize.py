"""Normalise documentation text for single-cell markdown tables."""

from __future__ import annotations

import re

LINE_BREAK = "<br>"

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")
_UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)\|")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize(text: str | None) -> str | None:
    """Return ``text`` trimmed, with line breaks as ``<br>``, pipes escaped and whitespace collapsed."""
    if not text:
        return None

    cleaned = text.strip()
    cleaned = _NEWLINE_RE.sub(LINE_BREAK, cleaned)
    cleaned = _UNESCAPED_PIPE_RE.sub(r"\\|", cleaned)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned)
    return cleaned


__all__ = ["LINE_BREAK", "sanitize"]
