"""Extract normalised API metadata from component declarations."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import List, Tuple, Union

from .analyzers.base import ResolutionError, SourceAnalyzer
from .logging import get_logger
from .models import (
    ClassDeclaration,
    ComponentMetadata,
    EventInfo,
    MethodInfo,
    ModuleDeclaration,
    ParameterInfo,
    PropertyInfo,
)
from .sanitize import sanitize

DEFAULT_ROOT_CLASS = "LitElement"
DEFAULT_MAX_DEPTH = 16

METHODS_TO_IGNORE = frozenset(
    {
        "connectedCallback",
        "disconnectedCallback",
        "update",
        "render",
        "firstUpdated",
        "updated",
        "focus",
        "blur",
    }
)

BUBBLES_MARKER = "--bubbles"
COMPOSED_MARKER = "--composed"
_MARKER_RE = re.compile(r"\s*(?:--bubbles|--composed)\s*")

logger = get_logger("extract")


def extract(
    analyzer: SourceAnalyzer,
    entrypoint: Union[str, Path],
    *,
    root_class: str = DEFAULT_ROOT_CLASS,
    class_name: str = "",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ComponentMetadata:
    """Return metadata for the component at ``entrypoint`` and its documented ancestors.

    With no ``class_name`` the first custom element exported by the module is used.
    When walking into a superclass the named declaration wins, falling back to the
    module's first export when the name is not declared there.
    """
    return _extract(analyzer, Path(entrypoint), root_class, class_name, max_depth, depth=0)


def _extract(
    analyzer: SourceAnalyzer,
    entrypoint: Path,
    root_class: str,
    class_name: str,
    max_depth: int,
    *,
    depth: int,
) -> ComponentMetadata:
    if depth > max_depth:
        raise ResolutionError(
            f"Superclass chain of {entrypoint} exceeds the maximum depth of {max_depth}"
        )

    module = analyzer.get_module(entrypoint)
    declaration = _find_declaration(module, class_name)
    if declaration is None:
        target = f"declaration '{class_name}'" if class_name else "custom element export"
        raise ResolutionError(f"No {target} found in {entrypoint}")

    logger.debug("Extracting %s from %s", declaration.name, entrypoint)
    properties, reactive_properties = analyze_fields(declaration)
    metadata = ComponentMetadata(
        tag_name=declaration.tag_name,
        class_name=declaration.name,
        source_path=str(entrypoint),
        summary=sanitize(declaration.summary),
        description=sanitize(declaration.description),
        properties=properties,
        reactive_properties=reactive_properties,
        methods=analyze_methods(declaration),
        events=analyze_events(declaration),
    )

    superclass = declaration.super_class
    if superclass is None or superclass.name == root_class:
        return metadata
    if not superclass.module:
        logger.debug(
            "Superclass %s of %s has no module; ending chain", superclass.name, declaration.name
        )
        return metadata

    metadata.super_class = _extract(
        analyzer,
        resolve_superclass_path(entrypoint, superclass.module),
        root_class,
        superclass.name,
        max_depth,
        depth=depth + 1,
    )
    return metadata


def _find_declaration(module: ModuleDeclaration, class_name: str) -> ClassDeclaration | None:
    # A named superclass may share its module with the element that extends it.
    if class_name:
        declaration = module.get_declaration(class_name)
        if declaration is not None:
            return declaration
    exports = module.custom_element_exports()
    return exports[0] if exports else None


def resolve_superclass_path(entrypoint: Union[str, Path], module: str) -> Path:
    """Resolve a superclass module specifier against the importing entrypoint.

    Compiled ``.js`` specifiers map back to their authored ``.ts`` source unless only
    the ``.js`` file exists on disk.
    """
    resolved = Path(os.path.normpath(Path(entrypoint).parent / module))
    if resolved.suffix == "":
        return resolved.with_name(resolved.name + ".ts")
    if resolved.suffix == ".js":
        source = resolved.with_suffix(".ts")
        if source.exists() or not resolved.exists():
            return source
    return resolved


def analyze_fields(declaration: ClassDeclaration) -> Tuple[List[PropertyInfo], List[PropertyInfo]]:
    """Split fields into plain and reactive properties."""
    properties: List[PropertyInfo] = []
    reactive_properties: List[PropertyInfo] = []
    for field_decl in declaration.fields:
        info = PropertyInfo(
            name=field_decl.name,
            description=sanitize(field_decl.description),
            type=sanitize(field_decl.type),
            visibility=field_decl.privacy,
            default=sanitize(field_decl.default),
        )
        if field_decl.name in declaration.reactive_properties:
            reactive_properties.append(info)
        else:
            properties.append(info)
    return properties, reactive_properties


def analyze_methods(declaration: ClassDeclaration) -> List[MethodInfo]:
    methods: List[MethodInfo] = []
    for method in declaration.methods:
        if method.name in METHODS_TO_IGNORE:
            continue
        methods.append(
            MethodInfo(
                name=method.name,
                description=sanitize(method.description),
                visibility=method.privacy,
                parameters=[
                    ParameterInfo(
                        name=parameter.name,
                        summary=sanitize(parameter.summary),
                        description=sanitize(parameter.description),
                        type=sanitize(parameter.type),
                        default=sanitize(parameter.default),
                    )
                    for parameter in method.parameters
                ],
                returns=sanitize(method.return_type),
            )
        )
    return methods


def analyze_events(declaration: ClassDeclaration) -> List[EventInfo]:
    events: List[EventInfo] = []
    for event in declaration.events:
        description, bubbles, composed = event_flags(event.description)
        events.append(
            EventInfo(
                name=event.name,
                description=sanitize(description),
                type=sanitize(event.type),
                bubbles=bubbles,
                composed=composed,
            )
        )
    return events


def event_flags(description: str | None) -> Tuple[str | None, bool, bool]:
    """Read ``--bubbles``/``--composed`` markers from an event description.

    Returns the description with every marker removed along with the two flags.
    """
    if description is None:
        return None, False, False
    bubbles = BUBBLES_MARKER in description
    composed = COMPOSED_MARKER in description
    return _MARKER_RE.sub("", description), bubbles, composed


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_ROOT_CLASS",
    "METHODS_TO_IGNORE",
    "analyze_events",
    "analyze_fields",
    "analyze_methods",
    "event_flags",
    "extract",
    "resolve_superclass_path",
]
