"""Configuration loading for elementdocs (.elementdocs.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .extract import DEFAULT_MAX_DEPTH, DEFAULT_ROOT_CLASS

CONFIG_FILENAME = ".elementdocs.yml"
DEFAULT_DOCS_DIR = "docs/components"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ElementDocsConfig:
    """Represents the settings defined in .elementdocs.yml."""

    root: Path
    docs_dir: Path
    docs: Dict[str, List[str]] = field(default_factory=dict)
    root_class: str = DEFAULT_ROOT_CLASS
    max_depth: int = DEFAULT_MAX_DEPTH
    strict_markers: bool = False

    def doc_path(self, doc_name: str) -> Path:
        return self.docs_dir / doc_name

    def entrypoint_path(self, entrypoint: str) -> Path:
        return self.root / entrypoint


def load_config(config_path: Path) -> ElementDocsConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ElementDocsConfig(root=root, docs_dir=root / DEFAULT_DOCS_DIR)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    docs_dir = _as_str(data.get("docs_dir")) or DEFAULT_DOCS_DIR
    max_depth = _as_int(data.get("max_depth"))
    if max_depth is not None and max_depth < 0:
        raise ConfigError("max_depth must not be negative")

    return ElementDocsConfig(
        root=root,
        docs_dir=root / docs_dir,
        docs=_as_docs_mapping(data.get("docs")),
        root_class=_as_str(data.get("root_class")) or DEFAULT_ROOT_CLASS,
        max_depth=DEFAULT_MAX_DEPTH if max_depth is None else max_depth,
        strict_markers=_as_bool(data.get("strict_markers")) or False,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_docs_mapping(value: Any) -> Dict[str, List[str]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError("docs must map documentation files to lists of entrypoints")
    mapping: Dict[str, List[str]] = {}
    for doc_name, entrypoints in value.items():
        paths = _as_str_list(entrypoints)
        if not paths:
            raise ConfigError(f"docs.{doc_name} must list at least one entrypoint")
        mapping[str(doc_name)] = paths
    return mapping


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
