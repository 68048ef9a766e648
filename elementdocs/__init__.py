"""Regenerate API tables in web component documentation."""

__version__ = "0.1.0"
