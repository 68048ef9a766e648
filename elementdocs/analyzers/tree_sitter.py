"""Tree-sitter powered declaration analyzer for TypeScript web components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from .base import ResolutionError, SourceAnalyzer
from .jsdoc import JsDoc, parse_jsdoc, parse_named_tag, parse_typed_tag
from ..logging import get_logger
from ..models import (
    ClassDeclaration,
    EventDeclaration,
    FieldDeclaration,
    MethodDeclaration,
    ModuleDeclaration,
    ParameterDeclaration,
    SuperClassReference,
)

try:  # pragma: no cover - optional dependency
    from tree_sitter import Parser
    from tree_sitter_languages import get_language

    TREE_SITTER_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    Parser = None  # type: ignore[assignment]
    get_language = None  # type: ignore[assignment]
    TREE_SITTER_AVAILABLE = False


_CLASS_NODE_TYPES = {"class_declaration", "abstract_class_declaration", "class"}
_PUNCTUATION = {"{", "}", ";", ","}
_REACTIVE_DECORATORS = {"property", "state", "internalProperty"}
_PRIVACY_MODIFIERS = {"private", "protected", "public"}
_LITERAL_TYPES = {
    "true": "boolean",
    "false": "boolean",
    "number": "number",
    "string": "string",
    "template_string": "string",
}
_CONSTRUCTOR_TYPES = {
    "String": "string",
    "Boolean": "boolean",
    "Number": "number",
    "Array": "array",
    "Object": "object",
}


@dataclass
class _ImportBinding:
    imported_name: str
    specifier: str


@dataclass
class _ModuleState:
    path: str
    source: bytes
    classes: List[ClassDeclaration] = field(default_factory=list)
    imports: Dict[str, _ImportBinding] = field(default_factory=dict)
    exported_names: Set[str] = field(default_factory=set)
    defined_tags: Dict[str, str] = field(default_factory=dict)
    pending_supers: Dict[str, str] = field(default_factory=dict)


class TreeSitterAnalyzer(SourceAnalyzer):
    """Builds component declarations from TypeScript sources using tree-sitter."""

    def __init__(self) -> None:
        if not TREE_SITTER_AVAILABLE:
            raise RuntimeError(
                "tree-sitter is required for source analysis. "
                "Install it with `pip install tree-sitter tree-sitter-languages`."
            )
        self._parsers: Dict[str, Parser] = {}
        self._modules: Dict[Path, ModuleDeclaration] = {}
        self.logger = get_logger("analyzers.tree_sitter")

    def get_module(self, path: Union[str, Path]) -> ModuleDeclaration:
        resolved = Path(path).expanduser().resolve()
        cached = self._modules.get(resolved)
        if cached is not None:
            return cached
        if not resolved.is_file():
            raise ResolutionError(f"Module not found: {resolved}")
        try:
            source = resolved.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ResolutionError(f"Unable to read {resolved}: {exc}") from exc

        self.logger.debug("Parsing %s", resolved)
        module = self.parse_source(source, path=str(resolved), language_key=self._language_for_file(resolved))
        self._modules[resolved] = module
        return module

    def parse_source(
        self, source: str, *, path: str = "<memory>", language_key: str = "typescript"
    ) -> ModuleDeclaration:
        """Parse ``source`` and return its class declarations."""
        parser = self._get_parser(language_key)
        source_bytes = source.encode("utf-8")
        tree = parser.parse(source_bytes)
        state = _ModuleState(path=path, source=source_bytes)
        self._visit_program(state, tree.root_node)
        self._finalise(state)
        return ModuleDeclaration(path=path, classes=state.classes)

    def _get_parser(self, language_key: str) -> Parser:
        parser = self._parsers.get(language_key)
        if parser is not None:
            return parser
        language = get_language(language_key)
        parser = Parser()
        parser.set_language(language)
        self._parsers[language_key] = parser
        return parser

    @staticmethod
    def _language_for_file(path: Path) -> str:
        if path.suffix.lower() in {".tsx", ".jsx"}:
            return "tsx"
        return "typescript"

    @staticmethod
    def _node_text(node, source_bytes) -> str:  # type: ignore[no-untyped-def]
        return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")

    # Program level

    def _visit_program(self, state: _ModuleState, root) -> None:  # type: ignore[no-untyped-def]
        pending_doc: Optional[str] = None
        for child in root.children:
            if child.type == "comment":
                text = self._node_text(child, state.source)
                pending_doc = text if text.startswith("/**") else None
                continue
            if child.type == "import_statement":
                self._record_import(state, child)
            elif child.type == "export_statement":
                self._visit_export(state, child, pending_doc)
            elif child.type in _CLASS_NODE_TYPES:
                self._visit_class(state, child, pending_doc, [], exported=False)
            elif child.type == "expression_statement":
                self._record_define(state, child)
            pending_doc = None

    def _record_import(self, state: _ModuleState, node) -> None:  # type: ignore[no-untyped-def]
        source_node = node.child_by_field_name("source")
        if source_node is None:
            return
        specifier = _unquote(self._node_text(source_node, state.source))
        for clause in node.named_children:
            if clause.type != "import_clause":
                continue
            for item in clause.named_children:
                if item.type == "identifier":
                    local = self._node_text(item, state.source)
                    state.imports[local] = _ImportBinding(imported_name=local, specifier=specifier)
                elif item.type == "named_imports":
                    for spec in item.named_children:
                        if spec.type != "import_specifier":
                            continue
                        name_node = spec.child_by_field_name("name")
                        alias_node = spec.child_by_field_name("alias")
                        if name_node is None:
                            continue
                        imported = self._node_text(name_node, state.source)
                        local = self._node_text(alias_node, state.source) if alias_node is not None else imported
                        state.imports[local] = _ImportBinding(imported_name=imported, specifier=specifier)

    def _visit_export(self, state: _ModuleState, node, doc: Optional[str]) -> None:  # type: ignore[no-untyped-def]
        decorators = [child for child in node.children if child.type == "decorator"]
        declaration = node.child_by_field_name("declaration")
        if declaration is None:
            declaration = node.child_by_field_name("value")
        if declaration is not None and declaration.type in _CLASS_NODE_TYPES:
            self._visit_class(state, declaration, doc, decorators, exported=True)
            return
        for clause in node.named_children:
            if clause.type != "export_clause":
                continue
            for spec in clause.named_children:
                name_node = spec.child_by_field_name("name")
                if spec.type == "export_specifier" and name_node is not None:
                    state.exported_names.add(self._node_text(name_node, state.source))

    def _record_define(self, state: _ModuleState, node) -> None:  # type: ignore[no-untyped-def]
        call = node.named_children[0] if node.named_children else None
        if call is None or call.type != "call_expression":
            return
        function = call.child_by_field_name("function")
        if function is None or not self._node_text(function, state.source).endswith("customElements.define"):
            return
        arguments = call.child_by_field_name("arguments")
        args = list(arguments.named_children) if arguments is not None else []
        if len(args) < 2 or args[0].type not in {"string", "template_string"}:
            return
        tag = _unquote(self._node_text(args[0], state.source))
        state.defined_tags[self._node_text(args[1], state.source)] = tag

    # Classes

    def _visit_class(
        self,
        state: _ModuleState,
        node,  # type: ignore[no-untyped-def]
        doc: Optional[str],
        decorators: list,
        *,
        exported: bool,
    ) -> None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return
        decorators = decorators + [child for child in node.children if child.type == "decorator"]
        jsdoc = parse_jsdoc(doc)
        summary = jsdoc.first("summary")

        declaration = ClassDeclaration(
            name=self._node_text(name_node, state.source),
            tag_name=self._custom_element_tag(state, decorators),
            summary=summary.body if summary else None,
            description=jsdoc.description,
            events=self._events_from_jsdoc(jsdoc),
            exported=exported,
        )

        super_name = self._super_class_name(state, node)
        if super_name:
            state.pending_supers[declaration.name] = super_name

        body = node.child_by_field_name("body")
        if body is not None:
            self._visit_class_body(state, declaration, body)
        state.classes.append(declaration)

    def _custom_element_tag(self, state: _ModuleState, decorators: list) -> Optional[str]:
        for decorator in decorators:
            call = decorator.named_children[0] if decorator.named_children else None
            if call is None or call.type != "call_expression":
                continue
            function = call.child_by_field_name("function")
            if function is None or self._node_text(function, state.source) != "customElement":
                continue
            arguments = call.child_by_field_name("arguments")
            for arg in arguments.named_children if arguments is not None else []:
                if arg.type in {"string", "template_string"}:
                    return _unquote(self._node_text(arg, state.source))
        return None

    def _super_class_name(self, state: _ModuleState, node) -> Optional[str]:  # type: ignore[no-untyped-def]
        for child in node.children:
            if child.type != "class_heritage":
                continue
            for clause in child.named_children:
                if clause.type == "extends_clause":
                    return self._base_name(state, clause)
            # Plain JS grammar places the expression directly under class_heritage.
            for expression in child.named_children:
                if expression.type != "implements_clause":
                    return self._base_name_from_expression(state, expression)
        return None

    def _base_name(self, state: _ModuleState, clause) -> Optional[str]:  # type: ignore[no-untyped-def]
        value = clause.child_by_field_name("value")
        if value is None:
            candidates = [c for c in clause.named_children if c.type != "type_arguments"]
            value = candidates[0] if candidates else None
        if value is None:
            return None
        return self._base_name_from_expression(state, value)

    def _base_name_from_expression(self, state: _ModuleState, expression) -> Optional[str]:  # type: ignore[no-untyped-def]
        # Mixin applications document the innermost base class.
        while expression is not None and expression.type == "call_expression":
            arguments = expression.child_by_field_name("arguments")
            args = list(arguments.named_children) if arguments is not None else []
            expression = args[0] if args else None
        if expression is None:
            return None
        return self._node_text(expression, state.source)

    def _visit_class_body(self, state: _ModuleState, declaration: ClassDeclaration, body) -> None:  # type: ignore[no-untyped-def]
        pending_doc: Optional[str] = None
        pending_decorators: list = []
        for child in body.children:
            if child.type in _PUNCTUATION:
                continue
            if child.type == "comment":
                text = self._node_text(child, state.source)
                pending_doc = text if text.startswith("/**") else pending_doc
                continue
            if child.type == "decorator":
                pending_decorators.append(child)
                continue
            if child.type in {"public_field_definition", "field_definition"}:
                self._visit_field(state, declaration, child, pending_doc, pending_decorators)
            elif child.type == "method_definition":
                self._visit_method(state, declaration, child, pending_doc, pending_decorators)
            pending_doc = None
            pending_decorators = []

    def _visit_field(
        self,
        state: _ModuleState,
        declaration: ClassDeclaration,
        node,  # type: ignore[no-untyped-def]
        doc: Optional[str],
        decorators: list,
    ) -> None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            name_node = node.child_by_field_name("property")
        if name_node is None:
            return
        name = self._node_text(name_node, state.source)
        value_node = node.child_by_field_name("value")
        if _has_child(node, "static"):
            if name == "properties" and value_node is not None:
                self._record_static_properties(state, declaration, value_node)
            return

        jsdoc = parse_jsdoc(doc)
        type_tag = jsdoc.first("type")
        type_text = (
            self._annotation_text(state, node.child_by_field_name("type"))
            or (parse_typed_tag(type_tag.body)[0] if type_tag else None)
            or (_LITERAL_TYPES.get(value_node.type) if value_node is not None else None)
        )
        field_decl = FieldDeclaration(
            name=name,
            description=jsdoc.description,
            type=type_text,
            privacy=self._privacy(state, node, name, jsdoc),
            default=self._node_text(value_node, state.source) if value_node is not None else None,
        )
        _upsert_field(declaration, field_decl)
        all_decorators = decorators + [child for child in node.children if child.type == "decorator"]
        if self._is_reactive(state, all_decorators):
            declaration.reactive_properties.add(name)

    def _visit_method(
        self,
        state: _ModuleState,
        declaration: ClassDeclaration,
        node,  # type: ignore[no-untyped-def]
        doc: Optional[str],
        decorators: list,
    ) -> None:
        if _has_child(node, "static"):
            return
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return
        name = self._node_text(name_node, state.source)
        if name == "constructor":
            return

        jsdoc = parse_jsdoc(doc)
        privacy = self._privacy(state, node, name, jsdoc)
        parameters = self._parameters(state, node, jsdoc)

        if _has_child(node, "get") or _has_child(node, "set"):
            if _has_child(node, "get"):
                type_text = self._annotation_text(state, node.child_by_field_name("return_type"))
            else:
                type_text = parameters[0].type if parameters else None
            existing = next((item for item in declaration.fields if item.name == name), None)
            if existing is None:
                declaration.fields.append(
                    FieldDeclaration(name=name, description=jsdoc.description, type=type_text, privacy=privacy)
                )
            else:
                existing.description = existing.description or jsdoc.description
                existing.type = existing.type or type_text
            if self._is_reactive(state, decorators):
                declaration.reactive_properties.add(name)
            return

        returns_tag = jsdoc.first("returns", "return")
        return_type = self._annotation_text(state, node.child_by_field_name("return_type"))
        if return_type is None and returns_tag is not None:
            return_type = parse_typed_tag(returns_tag.body)[0]

        declaration.methods.append(
            MethodDeclaration(
                name=name,
                description=jsdoc.description,
                privacy=privacy,
                parameters=parameters,
                return_type=return_type,
            )
        )

    def _parameters(self, state: _ModuleState, node, jsdoc: JsDoc) -> List[ParameterDeclaration]:  # type: ignore[no-untyped-def]
        documented = {}
        for tag in jsdoc.all("param"):
            parsed = parse_named_tag(tag.body)
            if parsed is not None:
                documented[parsed.name] = parsed

        parameters: List[ParameterDeclaration] = []
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return parameters
        for param in params_node.named_children:
            if param.type not in {"required_parameter", "optional_parameter"}:
                continue
            pattern = param.child_by_field_name("pattern")
            if pattern is None:
                continue
            name = self._node_text(pattern, state.source)
            value_node = param.child_by_field_name("value")
            doc = documented.get(name.lstrip("."))
            parameters.append(
                ParameterDeclaration(
                    name=name,
                    description=doc.description if doc else None,
                    type=self._annotation_text(state, param.child_by_field_name("type"))
                    or (doc.type if doc else None),
                    default=self._node_text(value_node, state.source) if value_node is not None else None,
                )
            )
        return parameters

    def _record_static_properties(self, state: _ModuleState, declaration: ClassDeclaration, value) -> None:  # type: ignore[no-untyped-def]
        if value.type != "object":
            return
        for pair in value.named_children:
            if pair.type != "pair":
                continue
            key_node = pair.child_by_field_name("key")
            if key_node is None:
                continue
            name = _unquote(self._node_text(key_node, state.source))
            declaration.reactive_properties.add(name)
            if any(item.name == name for item in declaration.fields):
                continue
            declaration.fields.append(
                FieldDeclaration(
                    name=name,
                    type=self._static_property_type(state, pair.child_by_field_name("value")),
                    privacy="public",
                )
            )

    def _static_property_type(self, state: _ModuleState, options) -> Optional[str]:  # type: ignore[no-untyped-def]
        if options is None or options.type != "object":
            return None
        for pair in options.named_children:
            key_node = pair.child_by_field_name("key") if pair.type == "pair" else None
            if key_node is None or self._node_text(key_node, state.source) != "type":
                continue
            value = pair.child_by_field_name("value")
            if value is not None:
                return _CONSTRUCTOR_TYPES.get(self._node_text(value, state.source))
        return None

    def _events_from_jsdoc(self, jsdoc: JsDoc) -> List[EventDeclaration]:
        events: List[EventDeclaration] = []
        for tag in jsdoc.all("fires", "event"):
            parsed = parse_named_tag(tag.body)
            if parsed is None:
                continue
            events.append(EventDeclaration(name=parsed.name, description=parsed.description, type=parsed.type))
        return events

    def _privacy(self, state: _ModuleState, node, name: str, jsdoc: JsDoc) -> str:  # type: ignore[no-untyped-def]
        for child in node.children:
            if child.type == "accessibility_modifier":
                modifier = self._node_text(child, state.source).strip()
                if modifier in _PRIVACY_MODIFIERS:
                    return modifier
        if name.startswith("#") or jsdoc.has("private"):
            return "private"
        if jsdoc.has("protected"):
            return "protected"
        return "public"

    def _is_reactive(self, state: _ModuleState, decorators: list) -> bool:
        for decorator in decorators:
            target = decorator.named_children[0] if decorator.named_children else None
            if target is None:
                continue
            if target.type == "call_expression":
                target = target.child_by_field_name("function")
            if target is not None and self._node_text(target, state.source) in _REACTIVE_DECORATORS:
                return True
        return False

    def _annotation_text(self, state: _ModuleState, node) -> Optional[str]:  # type: ignore[no-untyped-def]
        if node is None:
            return None
        text = self._node_text(node, state.source).strip()
        if text.startswith(":"):
            text = text[1:].strip()
        return text or None

    def _finalise(self, state: _ModuleState) -> None:
        local_names = {decl.name for decl in state.classes}
        for decl in state.classes:
            if decl.name in state.exported_names:
                decl.exported = True
            if decl.tag_name is None and decl.name in state.defined_tags:
                decl.tag_name = state.defined_tags[decl.name]
            super_name = state.pending_supers.get(decl.name)
            if super_name is None:
                continue
            binding = state.imports.get(super_name)
            if binding is not None:
                decl.super_class = SuperClassReference(name=binding.imported_name, module=binding.specifier)
            elif super_name in local_names:
                decl.super_class = SuperClassReference(name=super_name, module=state.path)
            else:
                decl.super_class = SuperClassReference(name=super_name)


def _has_child(node, node_type: str) -> bool:  # type: ignore[no-untyped-def]
    return any(child.type == node_type for child in node.children)


def _upsert_field(declaration: ClassDeclaration, field_decl: FieldDeclaration) -> None:
    for index, existing in enumerate(declaration.fields):
        if existing.name == field_decl.name:
            field_decl.type = field_decl.type or existing.type
            declaration.fields[index] = field_decl
            return
    declaration.fields.append(field_decl)


def _unquote(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in {"'", '"', "`"}:
        return text[1:-1]
    return text


__all__ = ["TreeSitterAnalyzer", "TREE_SITTER_AVAILABLE"]
