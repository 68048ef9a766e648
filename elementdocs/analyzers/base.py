"""Base classes for source analyzers."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from ..models import ModuleDeclaration


class ResolutionError(RuntimeError):
    """Raised when a module, custom element export or declaration cannot be found."""


class SourceAnalyzer(ABC):
    """Contract for analyzers that turn component source into declarations."""

    @abstractmethod
    def get_module(self, path: Union[str, Path]) -> ModuleDeclaration:
        """Return the declarations for the module at ``path``.

        Implementations raise :class:`ResolutionError` when the module does not exist.
        """
