"""Post-processing helpers for generated documentation."""

from .markers import ApiMarkers, MarkerError

__all__ = ["ApiMarkers", "MarkerError"]
