"""Pass-through transformer that mirrors sources into the build directory."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

from ..config import BuildConfig
from ..models import Artifact, StyleBinding


class CopyTransformer:
    """Writes each module unchanged under the build directory.

    Quick-app builds never transform styles on their own; once
    :meth:`bind_styles` has been called, every script with a bound style
    sheet also gets that sheet written next to its output.
    """

    def __init__(self, source_path: Path, build_path: Path) -> None:
        self.source_path = source_path
        self.build_path = build_path
        self.style_bindings: Mapping[str, StyleBinding] = {}

    @classmethod
    def from_config(cls, config: BuildConfig) -> "CopyTransformer":
        return cls(config.source_path, config.build_path)

    def bind_styles(self, bindings: Mapping[str, StyleBinding]) -> None:
        """Share the classifier's live script to style-sheet map."""
        self.style_bindings = bindings

    def dist_path(self, module_id: str) -> Path:
        path = Path(module_id)
        try:
            relative = path.relative_to(self.source_path)
        except ValueError:
            # npm packages and other out-of-tree modules keep their name under npm/.
            relative = Path("npm") / path.name
        return self.build_path / relative

    async def transform(
        self,
        module_id: str,
        dependency_ids: Sequence[str],
        raw_source: str,
    ) -> Artifact:
        output_path = self.dist_path(module_id)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(raw_source, encoding="utf-8")
        binding = self.style_bindings.get(module_id)
        if binding is not None:
            self._write_bound_style(output_path, binding)
        return Artifact(output_path=output_path, content=raw_source)

    def _write_bound_style(self, script_output: Path, binding: StyleBinding) -> Path:
        css_source = Path(binding.css_path)
        target = script_output.with_suffix(css_source.suffix)
        target.write_text(css_source.read_text(encoding="utf-8"), encoding="utf-8")
        return target
