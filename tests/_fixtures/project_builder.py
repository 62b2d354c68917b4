"""Helper utilities for constructing temporary mini-app projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from minibuild.config import BuildConfig, load_config


class ProjectBuilder:
    """Utility for writing files into a throwaway project and loading its config."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = (tmp_path / "project").resolve()
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def source(self, relative: str) -> str:
        """Return the module id of a file under the source directory."""
        return str(self.root / "source" / relative)

    def config(self) -> BuildConfig:
        return load_config(self.root)

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["ProjectBuilder"]
