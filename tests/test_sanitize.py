"""Tests for documentation text sanitising."""

from __future__ import annotations

import pytest

from elementdocs.sanitize import LINE_BREAK, sanitize


@pytest.mark.parametrize("value", [None, ""])
def test_sanitize_returns_none_for_absent_text(value) -> None:
    assert sanitize(value) is None


def test_sanitize_trims_and_collapses_whitespace() -> None:
    assert sanitize("  The   selected\tbutton  ") == "The selected button"


def test_sanitize_replaces_each_line_break_with_marker() -> None:
    text = "First line.\nSecond line.\r\nThird line.\rFourth."
    result = sanitize(text)
    assert "\n" not in result and "\r" not in result
    assert result.count(LINE_BREAK) == 3
    assert result == "First line.<br>Second line.<br>Third line.<br>Fourth."


def test_sanitize_keeps_marker_when_lines_are_indented() -> None:
    assert sanitize("Label\n    continues here") == "Label<br> continues here"


def test_sanitize_escapes_table_delimiters() -> None:
    result = sanitize("'single' | 'multi' | 'none'")
    assert result == "'single' \\| 'multi' \\| 'none'"
    assert result.count("\\|") == 2


def test_sanitize_does_not_double_escape() -> None:
    assert sanitize("a \\| b") == "a \\| b"
