"""Tests for splicing API tables into documentation."""

from __future__ import annotations

from elementdocs.markdown.assembler import ComponentTables, NamedTable
from elementdocs.markdown.table import MarkdownTable
from elementdocs.postproc.markers import ApiMarkers

DOC = (
    "# Segmented buttons\n\n"
    "Hand-written intro.\n\n"
    "<!-- auto-generated API docs start -->\n"
    "stale content\n"
    "<!-- auto-generated API docs end -->\n\n"
    "## Accessibility\n"
)


def _components() -> list[ComponentTables]:
    properties = MarkdownTable(["Property", "Type", "Default", "Description"])
    properties.add_row(["`disabled`", "`boolean`", "`false`", ""])
    events = MarkdownTable(["Event", "Type", "Bubbles", "Composed", "Description"])
    events.add_row(["`change`", "`Event`", "Yes", "No", "Selection changed."])
    return [
        ComponentTables(
            class_name="MdOutlinedSegmentedButton",
            tables=[
                NamedTable(name="Properties", table=properties),
                NamedTable(name="Events", table=events),
            ],
        ),
        ComponentTables(class_name="MdOutlinedSegmentedButtonSet", tables=[]),
    ]


def test_splice_replaces_marked_region() -> None:
    result = ApiMarkers().splice(DOC, _components())

    assert result == (
        "# Segmented buttons\n\n"
        "Hand-written intro.\n\n"
        "<!-- auto-generated API docs start -->\n\n"
        "## API\n\n\n"
        "### MdOutlinedSegmentedButton\n\n"
        "#### Properties\n\n"
        "Property | Type | Default | Description\n"
        "--- | --- | --- | ---\n"
        "`disabled` | `boolean` | `false` | \n\n"
        "#### Events\n\n"
        "Event | Type | Bubbles | Composed | Description\n"
        "--- | --- | --- | --- | ---\n"
        "`change` | `Event` | Yes | No | Selection changed.\n\n"
        "### MdOutlinedSegmentedButtonSet\n\n"
        "<!-- auto-generated API docs end -->\n\n"
        "## Accessibility\n"
    )


def test_splice_is_idempotent() -> None:
    markers = ApiMarkers()
    once = markers.splice(DOC, _components())
    twice = markers.splice(once, _components())
    assert twice == once


def test_splice_without_markers_is_noop() -> None:
    markers = ApiMarkers()
    document = "# Title\n\nNo generated section here.\n"
    assert markers.has_markers(document) is False
    assert markers.splice(document, _components()) == document


def test_end_marker_before_start_is_not_a_region() -> None:
    markers = ApiMarkers()
    document = f"{ApiMarkers.END}\ntext\n{ApiMarkers.START}\n"
    assert markers.has_markers(document) is False
    assert markers.splice(document, _components()) == document


def test_splice_replaces_through_last_end_marker() -> None:
    start, end = ApiMarkers.START, ApiMarkers.END
    document = f"{start}\nA\n{end}\nB\n{end}\nC"
    result = ApiMarkers().splice(document, _components())
    assert result.startswith(f"{start}\n\n## API\n\n")
    assert result.endswith(f"{end}\nC")
    assert result.count(end) == 1
    assert "\nA\n" not in result
    assert "\nB\n" not in result


def test_splice_keeps_content_after_last_end_marker() -> None:
    document = DOC + "\n<!-- auto-generated API docs end -->\nfooter\n"
    result = ApiMarkers().splice(document, _components())
    assert result.endswith("<!-- auto-generated API docs end -->\nfooter\n")
    assert "## Accessibility" not in result
    assert "stale content" not in result
