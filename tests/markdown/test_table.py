"""Tests for markdown table rendering."""

from __future__ import annotations

import pytest

from elementdocs.markdown.table import MarkdownTable, RowShapeError


def test_render_includes_header_separator_and_rows() -> None:
    table = MarkdownTable(["Property", "Type"])
    table.add_row(["`selected`", "`boolean`"])
    table.add_row(["`label`", "`string`"])

    assert table.render() == (
        "Property | Type\n"
        "--- | ---\n"
        "`selected` | `boolean`\n"
        "`label` | `string`"
    )
    assert str(table) == table.render()


def test_render_empty_table_has_two_lines() -> None:
    table = MarkdownTable(["Event", "Type", "Bubbles"])
    lines = table.render().splitlines()
    assert lines == ["Event | Type | Bubbles", "--- | --- | ---"]


@pytest.mark.parametrize("cells", [["only one"], ["a", "b", "c"], []])
def test_add_row_rejects_wrong_shape_without_mutating(cells) -> None:
    table = MarkdownTable(["Method", "Returns"])
    table.add_row(["`click`", "`void`"])

    with pytest.raises(RowShapeError, match="must match column length"):
        table.add_row(cells)

    assert table.rows == [["`click`", "`void`"]]


def test_columns_are_fixed_at_construction() -> None:
    columns = ["A", "B"]
    table = MarkdownTable(columns)
    columns.append("C")
    assert table.columns == ["A", "B"]
