"""Minimal JSDoc comment parsing for component declarations."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

_TAG_RE = re.compile(r"^@(?P<tag>[A-Za-z][\w-]*)\s*(?P<rest>.*)$")
_NAMED_BODY_RE = re.compile(
    r"^(?:\{(?P<pre_type>[^}]*)\}\s*)?"
    r"(?P<name>[^\s{}]+)"
    r"(?:\s*\{(?P<post_type>[^}]*)\})?"
    r"(?:\s+-(?=\s|$))?"
    r"(?:\s+(?P<description>[\s\S]*))?$"
)
_TYPED_BODY_RE = re.compile(r"^\{(?P<type>[^}]*)\}\s*(?P<description>[\s\S]*)$")


@dataclass
class JsDocTag:
    tag: str
    body: str


@dataclass
class NamedTag:
    """A tag body shaped like ``name {Type} - description``."""

    name: str
    type: Optional[str] = None
    description: Optional[str] = None


@dataclass
class JsDoc:
    description: Optional[str] = None
    tags: List[JsDocTag] = field(default_factory=list)

    def has(self, tag: str) -> bool:
        return any(item.tag == tag for item in self.tags)

    def first(self, *names: str) -> Optional[JsDocTag]:
        for item in self.tags:
            if item.tag in names:
                return item
        return None

    def all(self, *names: str) -> List[JsDocTag]:
        return [item for item in self.tags if item.tag in names]


def parse_jsdoc(comment: Optional[str]) -> JsDoc:
    """Split a ``/** ... */`` comment into its description and tags."""
    if not comment:
        return JsDoc()

    body = comment.strip()
    if body.startswith("/**"):
        body = body[3:]
    if body.endswith("*/"):
        body = body[:-2]

    description_lines: List[str] = []
    tag_parts: List[tuple[str, List[str]]] = []
    for raw in body.splitlines():
        line = raw.strip()
        if line.startswith("*"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        line = line.rstrip()
        match = _TAG_RE.match(line.strip())
        if match:
            tag_parts.append((match.group("tag"), [match.group("rest")]))
        elif tag_parts:
            tag_parts[-1][1].append(line)
        else:
            description_lines.append(line)

    description = "\n".join(description_lines).strip() or None
    tags = [JsDocTag(tag=tag, body="\n".join(parts).strip()) for tag, parts in tag_parts]
    return JsDoc(description=description, tags=tags)


def parse_named_tag(body: str) -> Optional[NamedTag]:
    """Parse ``@fires``/``@param`` bodies in either ``{Type} name`` or ``name {Type}`` order."""
    match = _NAMED_BODY_RE.match(body.strip())
    if not match:
        return None
    name = match.group("name")
    if name.startswith("[") and name.endswith("]"):
        name = name[1:-1].split("=", 1)[0]
    type_text = match.group("pre_type") or match.group("post_type")
    description = (match.group("description") or "").strip() or None
    return NamedTag(name=name, type=type_text.strip() if type_text else None, description=description)


def parse_typed_tag(body: str) -> tuple[Optional[str], Optional[str]]:
    """Return ``(type, description)`` for bodies like ``{Type} description``."""
    stripped = body.strip()
    match = _TYPED_BODY_RE.match(stripped)
    if not match:
        return None, stripped or None
    type_text = match.group("type").strip() or None
    description = match.group("description").strip() or None
    return type_text, description


__all__ = ["JsDoc", "JsDocTag", "NamedTag", "parse_jsdoc", "parse_named_tag", "parse_typed_tag"]
