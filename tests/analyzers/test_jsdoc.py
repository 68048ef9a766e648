"""Tests for JSDoc comment parsing."""

from __future__ import annotations

from elementdocs.analyzers.jsdoc import parse_jsdoc, parse_named_tag, parse_typed_tag


def test_parse_jsdoc_splits_description_and_tags() -> None:
    doc = parse_jsdoc(
        """/**
         * A segmented button set.
         *
         * Holds the buttons.
         *
         * @summary Groups related buttons.
         * @fires segmented-button-set-selection - Dispatched when a button
         *   is selected. --bubbles --composed
         * @private
         */"""
    )

    assert doc.description == "A segmented button set.\n\nHolds the buttons."
    assert doc.first("summary").body == "Groups related buttons."
    assert doc.has("private")
    fires = doc.all("fires")
    assert len(fires) == 1
    assert fires[0].body.startswith("segmented-button-set-selection - Dispatched")
    assert "--bubbles --composed" in fires[0].body


def test_parse_jsdoc_single_line_and_missing() -> None:
    assert parse_jsdoc("/** Whether the button is disabled. */").description == (
        "Whether the button is disabled."
    )
    empty = parse_jsdoc(None)
    assert empty.description is None
    assert empty.tags == []


def test_parse_named_tag_accepts_both_type_positions() -> None:
    first = parse_named_tag("{CustomEvent} change - The value changed.")
    assert (first.name, first.type, first.description) == ("change", "CustomEvent", "The value changed.")

    second = parse_named_tag("input {InputEvent} Fires on input.")
    assert (second.name, second.type, second.description) == ("input", "InputEvent", "Fires on input.")

    bare = parse_named_tag("close")
    assert (bare.name, bare.type, bare.description) == ("close", None, None)


def test_parse_named_tag_handles_optional_parameters() -> None:
    parsed = parse_named_tag("[force=false] Whether to override.")
    assert parsed.name == "force"
    assert parsed.description == "Whether to override."


def test_parse_typed_tag() -> None:
    assert parse_typed_tag("{boolean} True when selected.") == ("boolean", "True when selected.")
    assert parse_typed_tag("the result") == (None, "the result")
