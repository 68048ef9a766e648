"""Markdown table construction for component API docs."""

from .assembler import ComponentTables, NamedTable, build_tables
from .table import MarkdownTable, RowShapeError

__all__ = ["ComponentTables", "MarkdownTable", "NamedTable", "RowShapeError", "build_tables"]
