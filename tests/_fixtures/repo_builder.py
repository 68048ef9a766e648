"""Helper utilities for constructing temporary component packages in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping


class RepoBuilder:
    """Utility for writing files into a throwaway package root."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the package."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def read(self, relative: str) -> str:
        return (self.root / relative).read_text(encoding="utf-8")

    def path(self) -> Path:
        """Return the package root path."""
        return self.root


__all__ = ["RepoBuilder"]
