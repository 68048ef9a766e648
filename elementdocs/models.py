"""Core data models shared across elementdocs components."""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set


# Declarations produced by source analyzers


@dataclass
class FieldDeclaration:
    """A class field or accessor as written in component source."""

    name: str
    description: Optional[str] = None
    type: Optional[str] = None
    privacy: Optional[str] = None
    default: Optional[str] = None


@dataclass
class ParameterDeclaration:
    """A single method parameter."""

    name: str
    summary: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    default: Optional[str] = None


@dataclass
class MethodDeclaration:
    """A class method and its signature."""

    name: str
    description: Optional[str] = None
    privacy: Optional[str] = None
    parameters: List[ParameterDeclaration] = field(default_factory=list)
    return_type: Optional[str] = None


@dataclass
class EventDeclaration:
    """An event documented on a component class."""

    name: str
    description: Optional[str] = None
    type: Optional[str] = None


@dataclass
class SuperClassReference:
    """Name of a superclass and the module specifier it is imported from."""

    name: str
    module: Optional[str] = None


@dataclass
class ClassDeclaration:
    """Public surface of one component class."""

    name: str
    tag_name: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    fields: List[FieldDeclaration] = field(default_factory=list)
    reactive_properties: Set[str] = field(default_factory=set)
    methods: List[MethodDeclaration] = field(default_factory=list)
    events: List[EventDeclaration] = field(default_factory=list)
    super_class: Optional[SuperClassReference] = None
    exported: bool = False


@dataclass
class ModuleDeclaration:
    """All class declarations found in a single source module."""

    path: str
    classes: List[ClassDeclaration] = field(default_factory=list)

    def custom_element_exports(self) -> List[ClassDeclaration]:
        """Return exported classes registered as custom elements."""
        return [decl for decl in self.classes if decl.exported and decl.tag_name]

    def get_declaration(self, name: str) -> Optional[ClassDeclaration]:
        for decl in self.classes:
            if decl.name == name:
                return decl
        return None


# Normalised metadata consumed by the table assembler


@dataclass
class PropertyInfo:
    name: str
    description: Optional[str] = None
    type: Optional[str] = None
    visibility: Optional[str] = None
    default: Optional[str] = None


@dataclass
class ParameterInfo:
    name: str
    summary: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    default: Optional[str] = None


@dataclass
class MethodInfo:
    name: str
    description: Optional[str] = None
    visibility: Optional[str] = None
    parameters: List[ParameterInfo] = field(default_factory=list)
    returns: Optional[str] = None


@dataclass
class EventInfo:
    name: str
    description: Optional[str] = None
    type: Optional[str] = None
    bubbles: bool = False
    composed: bool = False


@dataclass
class ComponentMetadata:
    """Extracted API of a component class, linked to its documented ancestors."""

    class_name: str
    source_path: str
    tag_name: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    properties: List[PropertyInfo] = field(default_factory=list)
    reactive_properties: List[PropertyInfo] = field(default_factory=list)
    methods: List[MethodInfo] = field(default_factory=list)
    events: List[EventInfo] = field(default_factory=list)
    super_class: Optional["ComponentMetadata"] = None

    def iter_chain(self) -> Iterator["ComponentMetadata"]:
        """Yield this record followed by its ancestors, most-derived first."""
        current: Optional[ComponentMetadata] = self
        while current is not None:
            yield current
            current = current.super_class
