"""Managed marker utilities for generated API sections."""

from __future__ import annotations

from typing import Sequence

from ..markdown.assembler import ComponentTables


class MarkerError(RuntimeError):
    """Raised when a documentation file lacks the API markers in strict mode."""


class ApiMarkers:
    """Splices generated API tables between the auto-generated markers."""

    START = "<!-- auto-generated API docs start -->"
    END = "<!-- auto-generated API docs end -->"
    HEADING = "## API"

    def has_markers(self, markdown: str) -> bool:
        start = markdown.find(self.START)
        return start != -1 and markdown.find(self.END, start + len(self.START)) != -1

    def render_block(self, components: Sequence[ComponentTables]) -> str:
        """Render the combined component sections placed under the API heading."""
        block = ""
        for component in components:
            block += f"\n### {component.class_name}\n"
            for named in component.tables:
                block += f"\n#### {named.name}\n\n{named.table.render()}\n"
        return block

    def splice(self, markdown: str, components: Sequence[ComponentTables]) -> str:
        """Replace the marked region with freshly rendered tables.

        The region runs from the first start marker to the last end marker. The
        markdown is returned unchanged when the markers are missing.
        """
        if not self.has_markers(markdown):
            return markdown
        pre, rest = markdown.split(self.START, 1)
        _, post = rest.rsplit(self.END, 1)
        block = self.render_block(components)
        return f"{pre}{self.START}\n\n{self.HEADING}\n\n{block}\n{self.END}{post}"


__all__ = ["ApiMarkers", "MarkerError"]
