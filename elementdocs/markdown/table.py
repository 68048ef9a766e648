"""Pipe-delimited markdown tables."""

from __future__ import annotations

from typing import List, Sequence

DELIMITER = " | "
SEPARATOR = "---"


class RowShapeError(ValueError):
    """Raised when a row does not have one cell per column."""


class MarkdownTable:
    """Table with a fixed set of named columns."""

    def __init__(self, columns: Sequence[str]) -> None:
        self._columns: List[str] = list(columns)
        self._rows: List[List[str]] = []

    @property
    def columns(self) -> List[str]:
        return self._columns

    @property
    def rows(self) -> List[List[str]]:
        return self._rows

    def add_row(self, cells: Sequence[str]) -> None:
        if len(cells) != len(self._columns):
            raise RowShapeError(
                f"Row length ({len(cells)}) must match column length ({len(self._columns)})"
            )
        self._rows.append(list(cells))

    def render(self) -> str:
        header = DELIMITER.join(self._columns)
        separator = DELIMITER.join(SEPARATOR for _ in self._columns)
        lines = [header, separator]
        lines.extend(DELIMITER.join(row) for row in self._rows)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()
