"""Module classification, validation dispatch and dependency bookkeeping."""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import Dict, List

from .config import DEFAULT_HELPER_PATTERN, ValidationConfig
from .models import Module, ModuleKind, StyleBinding
from .stores import DependencyTree
from .validators import (
    ValidationPipeline,
    check_directory_shape,
    check_import_naming,
    check_line_count,
    check_style_import,
)

STYLE_EXTENSIONS = (".css", ".less", ".scss", ".sass")
SCRIPT_EXTENSIONS = (".js",)
CONFIG_EXTENSIONS = (".json",)


def _extension(module_id: str) -> str:
    return PurePosixPath(module_id.replace("\\", "/")).suffix.lower()


def is_style(module_id: str) -> bool:
    return _extension(module_id) in STYLE_EXTENSIONS


class ModuleClassifier:
    """Assigns each resolved module a kind and runs the rules for that kind."""

    def __init__(
        self,
        pipeline: ValidationPipeline,
        dependency_tree: DependencyTree,
        *,
        root: Path | None = None,
        validation: ValidationConfig | None = None,
        helper_pattern: str = DEFAULT_HELPER_PATTERN,
        bind_styles: bool = False,
    ) -> None:
        self.pipeline = pipeline
        self.dependency_tree = dependency_tree
        self.root = root
        self.validation = validation or ValidationConfig()
        self._helper_pattern = re.compile(helper_pattern)
        self.bind_styles = bind_styles
        self.style_bindings: Dict[str, StyleBinding] = {}

    def kind_of(self, module_id: str) -> ModuleKind:
        if self._helper_pattern.search(module_id):
            return ModuleKind.IGNORED
        extension = _extension(module_id)
        if extension in STYLE_EXTENSIONS:
            return ModuleKind.STYLE
        if extension in SCRIPT_EXTENSIONS:
            return ModuleKind.SCRIPT
        if extension in CONFIG_EXTENSIONS:
            return ModuleKind.CONFIG
        return ModuleKind.IGNORED

    def classify(self, module: Module) -> ModuleKind:
        kind = self.kind_of(module.id)
        if kind is ModuleKind.SCRIPT:
            self._inspect_script(module)
        elif kind is ModuleKind.STYLE:
            self.pipeline.extend(check_style_import(module, self.root))
        return kind

    def _inspect_script(self, module: Module) -> None:
        self.pipeline.extend(
            check_line_count(
                module,
                self.root,
                threshold=self.validation.max_lines,
                runtime_prefix=self.validation.runtime_prefix,
            )
        )
        self.pipeline.extend(check_directory_shape(module, self.root))
        self.pipeline.extend(check_import_naming(module, self.root))

        styles: List[str] = [dep for dep in module.dependency_ids if is_style(dep)]
        self.dependency_tree.record(module.id, styles)
        if self.bind_styles:
            self._bind_first_style(module.id, styles)

    def _bind_first_style(self, script_id: str, styles: List[str]) -> None:
        if not styles:
            self.style_bindings.pop(script_id, None)
            return
        css_type = _extension(styles[0]).lstrip(".")
        self.style_bindings[script_id] = StyleBinding(
            css_path=styles[0],
            css_type="sass" if css_type == "scss" else css_type,
        )


__all__ = ["ModuleClassifier", "StyleBinding", "STYLE_EXTENSIONS", "is_style"]
