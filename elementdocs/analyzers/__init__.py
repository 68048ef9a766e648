"""Source analyzers producing component declarations."""

from __future__ import annotations

from .base import ResolutionError, SourceAnalyzer

__all__ = [
    "ResolutionError",
    "SourceAnalyzer",
]
