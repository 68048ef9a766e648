"""Turn component metadata chains into named markdown tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..models import ComponentMetadata, MethodInfo, PropertyInfo
from .table import MarkdownTable

PROPERTY_COLUMNS = ("Property", "Type", "Default", "Description")
METHOD_COLUMNS = ("Method", "Parameters", "Returns", "Description")
EVENT_COLUMNS = ("Event", "Type", "Bubbles", "Composed", "Description")

FUNCTION_PLACEHOLDER = "function { ... }"
NO_PARAMETERS = "_None_"
PUBLIC = "public"


@dataclass
class NamedTable:
    name: str
    table: MarkdownTable


@dataclass
class ComponentTables:
    """Rendered tables for one documented component."""

    class_name: str
    tables: List[NamedTable] = field(default_factory=list)


def build_tables(metadata: ComponentMetadata) -> List[NamedTable]:
    """Build Properties, Methods and Events tables for ``metadata`` and its ancestors.

    Own members come first, followed by each superclass in turn. Only public
    properties and methods are listed; tables without rows are dropped.
    """
    properties = MarkdownTable(PROPERTY_COLUMNS)
    methods = MarkdownTable(METHOD_COLUMNS)
    events = MarkdownTable(EVENT_COLUMNS)

    for current in metadata.iter_chain():
        for prop in [*current.reactive_properties, *current.properties]:
            if prop.visibility != PUBLIC:
                continue
            properties.add_row(_property_row(prop))

        for method in current.methods:
            if method.visibility != PUBLIC:
                continue
            methods.add_row(_method_row(method))

        for event in current.events:
            events.add_row(
                [
                    _code(event.name),
                    _code(event.type),
                    "Yes" if event.bubbles else "No",
                    "Yes" if event.composed else "No",
                    event.description or "",
                ]
            )

    named = [
        NamedTable(name="Properties", table=properties),
        NamedTable(name="Methods", table=methods),
        NamedTable(name="Events", table=events),
    ]
    return [item for item in named if item.table.rows]


def _property_row(prop: PropertyInfo) -> List[str]:
    default = prop.default
    if default and "=>" in default:
        default = FUNCTION_PLACEHOLDER
    return [_code(prop.name), _code(prop.type), _code(default), prop.description or ""]


def _method_row(method: MethodInfo) -> List[str]:
    parameters = ", ".join(_code(parameter.name) for parameter in method.parameters)
    return [
        _code(method.name),
        parameters or NO_PARAMETERS,
        _code(method.returns),
        method.description or "",
    ]


def _code(value: Optional[str]) -> str:
    return f"`{value if value is not None else 'undefined'}`"


__all__ = [
    "ComponentTables",
    "EVENT_COLUMNS",
    "FUNCTION_PLACEHOLDER",
    "METHOD_COLUMNS",
    "NamedTable",
    "PROPERTY_COLUMNS",
    "build_tables",
]
