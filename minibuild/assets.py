"""Copying of static assets and the project config into the build directory."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List

from .config import BuildConfig
from .logging import get_logger

_COMPILED_SUFFIXES = {".js", ".scss", ".sass", ".less", ".css"}
_PROJECT_CONFIG = "project.config.json"
_NO_PROJECT_CONFIG = {"ali", "bu", "quick"}

logger = get_logger("assets")


def copy_assets(config: BuildConfig) -> List[Path]:
    """Mirror non-compiled files under ``<source>/assets`` into the build directory."""
    assets_dir = config.source_path / "assets"
    if not assets_dir.is_dir():
        return []
    copied: List[Path] = []
    for path in sorted(assets_dir.rglob("*")):
        if not path.is_file() or path.suffix.lower() in _COMPILED_SUFFIXES:
            continue
        target = config.build_path / path.relative_to(config.source_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(path, target)
        copied.append(target)
    logger.debug("Copied %d assets", len(copied))
    return copied


def copy_project_config(config: BuildConfig) -> Path | None:
    if config.build_type in _NO_PROJECT_CONFIG:
        return None
    source = config.root / _PROJECT_CONFIG
    if not source.is_file():
        logger.debug("No %s found; skipping", _PROJECT_CONFIG)
        return None
    target = config.build_path / _PROJECT_CONFIG
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
    return target


__all__ = ["copy_assets", "copy_project_config"]
