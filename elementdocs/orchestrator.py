"""Pipeline orchestration for API documentation updates."""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from .analyzers.base import SourceAnalyzer
from .config import ElementDocsConfig, load_config
from .extract import extract
from .logging import get_logger
from .markdown.assembler import ComponentTables, build_tables
from .postproc.markers import ApiMarkers, MarkerError


@dataclass
class DocUpdate:
    """Result of regenerating one documentation file."""

    path: Path
    changed: bool
    diff: str
    dry_run: bool


def _default_analyzer() -> SourceAnalyzer:
    from .analyzers.tree_sitter import TreeSitterAnalyzer

    return TreeSitterAnalyzer()


class Orchestrator:
    """Coordinates extraction, table assembly and splicing for configured docs."""

    def __init__(
        self,
        analyzer_factory: Callable[[], SourceAnalyzer] | None = None,
        markers: ApiMarkers | None = None,
    ) -> None:
        self._analyzer_factory = analyzer_factory or _default_analyzer
        self.markers = markers or ApiMarkers()
        self.logger = get_logger("orchestrator")

    def run_update(
        self,
        path: str | Path,
        *,
        dry_run: bool = False,
        config_path: Optional[Path] = None,
    ) -> List[DocUpdate]:
        """Regenerate the API block of every configured documentation file."""
        repo_path = Path(path).expanduser().resolve()
        config = load_config(config_path or repo_path)
        self.logger.info("Starting update run for %s", config.root)
        if not config.docs:
            self.logger.warning("No documentation files configured under %s", config.root)
            return []

        analyzer = self._analyzer_factory()
        results: List[DocUpdate] = []
        for doc_name, entrypoints in config.docs.items():
            results.append(self._update_doc(analyzer, config, doc_name, entrypoints, dry_run=dry_run))
        return results

    def render_component(
        self,
        path: str | Path,
        entrypoint: str,
        *,
        config_path: Optional[Path] = None,
    ) -> str:
        """Return the generated API section for a single entrypoint."""
        repo_path = Path(path).expanduser().resolve()
        config = load_config(config_path or repo_path)
        component = self.build_component(self._analyzer_factory(), config, entrypoint)
        return self.markers.render_block([component]).lstrip("\n")

    def build_component(
        self, analyzer: SourceAnalyzer, config: ElementDocsConfig, entrypoint: str
    ) -> ComponentTables:
        metadata = extract(
            analyzer,
            config.entrypoint_path(entrypoint),
            root_class=config.root_class,
            max_depth=config.max_depth,
        )
        tables = build_tables(metadata)
        self.logger.debug(
            "Built %d tables for %s (%s)",
            len(tables),
            metadata.class_name,
            ", ".join(named.name for named in tables) or "empty",
        )
        return ComponentTables(class_name=metadata.class_name, tables=tables)

    def _update_doc(
        self,
        analyzer: SourceAnalyzer,
        config: ElementDocsConfig,
        doc_name: str,
        entrypoints: List[str],
        *,
        dry_run: bool,
    ) -> DocUpdate:
        doc_path = config.doc_path(doc_name)
        if not doc_path.is_file():
            raise FileNotFoundError(f"Documentation file not found: {doc_path}")

        original = doc_path.read_text(encoding="utf-8")
        components = [self.build_component(analyzer, config, entrypoint) for entrypoint in entrypoints]

        if not self.markers.has_markers(original):
            message = f"{doc_name} has no auto-generated API markers"
            if config.strict_markers:
                raise MarkerError(message)
            self.logger.warning("%s; leaving it unchanged", message)
            return DocUpdate(path=doc_path, changed=False, diff="", dry_run=dry_run)

        updated = self.markers.splice(original, components)
        if updated == original:
            self.logger.info("%s already up to date", doc_name)
            return DocUpdate(path=doc_path, changed=False, diff="", dry_run=dry_run)

        diff = _unified_diff(original, updated, doc_name)
        if dry_run:
            self.logger.info("%s would change (dry-run)", doc_name)
        else:
            doc_path.write_text(updated, encoding="utf-8")
            self.logger.info("Updated %s", doc_name)
        return DocUpdate(path=doc_path, changed=True, diff=diff, dry_run=dry_run)


def _unified_diff(before: str, after: str, name: str) -> str:
    return "".join(
        difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f"a/{name}",
            tofile=f"b/{name}",
        )
    )


__all__ = ["DocUpdate", "Orchestrator"]
