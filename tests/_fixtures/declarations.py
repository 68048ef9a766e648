"""In-memory analyzer used to exercise the pipeline without parsing source."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Union

from elementdocs.analyzers.base import ResolutionError, SourceAnalyzer
from elementdocs.models import ModuleDeclaration


class FakeAnalyzer(SourceAnalyzer):
    """Serves pre-built module declarations keyed by normalised path."""

    def __init__(self, modules: Dict[str, ModuleDeclaration]) -> None:
        self._modules = {os.path.normpath(path): module for path, module in modules.items()}
        self.requested: List[str] = []

    def get_module(self, path: Union[str, Path]) -> ModuleDeclaration:
        key = os.path.normpath(str(path))
        self.requested.append(key)
        try:
            return self._modules[key]
        except KeyError:
            raise ResolutionError(f"Module not found: {key}") from None


__all__ = ["FakeAnalyzer"]
