"""Pipeline orchestration for full and watch-triggered build passes."""

from __future__ import annotations

import asyncio
import dataclasses
import time
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .assets import copy_assets, copy_project_config
from .classifier import ModuleClassifier
from .config import BuildConfig, load_config
from .logging import get_logger
from .models import BuildEvent, BuildReport, Module, ModuleKind
from .resolver import ImportGraphResolver, ModuleResolver, ResolutionFailure
from .scheduler import BuildListener, TransformScheduler
from .stores import ContentCache, DependencyTree
from .transformers import TransformFailure, Transformer, discover_transformer
from .validators import ValidationError, ValidationPipeline, relative_id
from .watch import WatchResolver


class Orchestrator:
    """Owns the incremental build state and runs one build pass at a time."""

    def __init__(
        self,
        config: BuildConfig,
        resolver: ModuleResolver | None = None,
        transformer: Transformer | None = None,
        listeners: Optional[Iterable[BuildListener]] = None,
    ) -> None:
        self.config = config
        self.logger = get_logger("orchestrator")
        self.cache = ContentCache()
        self.dependency_tree = DependencyTree()
        self.pipeline = ValidationPipeline()
        self.classifier = ModuleClassifier(
            self.pipeline,
            self.dependency_tree,
            root=config.root,
            validation=config.validation,
            helper_pattern=config.helper_pattern,
            bind_styles=config.inline_styles,
        )
        self.resolver = resolver or ImportGraphResolver(
            config.root,
            config.aliases,
            extra_entries=config.patch_entries,
            diagnostics=self.pipeline,
        )
        transformer = transformer or discover_transformer(config.transformer, config)
        if config.inline_styles:
            bind_styles = getattr(transformer, "bind_styles", None)
            if callable(bind_styles):
                bind_styles(self.classifier.style_bindings)
        self.scheduler = TransformScheduler(
            transformer,
            self.cache,
            listeners,
        )
        self.scheduler.subscribe(self._log_progress)
        self.watch_resolver = WatchResolver(
            self.dependency_tree,
            self.cache,
            redirect_styles=config.redirect_styles,
        )

    @classmethod
    def from_path(cls, path: str, *, build_type: str | None = None, **kwargs: object) -> "Orchestrator":
        """Build an orchestrator from the project's .minibuild.yml."""
        config = load_config(Path(path).expanduser().resolve())
        if build_type:
            config = dataclasses.replace(config, build_type=build_type)
        return cls(config, **kwargs)  # type: ignore[arg-type]

    def run(self, entry: str | None = None) -> BuildReport:
        """Synchronous wrapper around :meth:`build`."""
        return asyncio.run(self.build(entry))

    async def build(self, entry: str | None = None) -> BuildReport:
        """Run one pass: resolve, classify, validate, then transform stale modules.

        Raises :class:`ValidationError` before any transform when an error
        diagnostic was collected.
        """
        entry_id = entry or str(self.config.entry_path)
        started = time.perf_counter()
        self.logger.info("Resolving dependencies from %s", relative_id(entry_id, self.config.root))
        try:
            modules = self.resolver.resolve(entry_id)
        except ResolutionFailure:
            # Diagnostics gathered before the failure belong to the aborted pass.
            self.pipeline.drain_and_check()
            raise
        self.logger.debug("Resolver returned %d modules", len(modules))

        scripts, styles = self._classify(modules)
        self.logger.debug("Collected %d diagnostics", self.pipeline.pending())
        outcome = self.pipeline.drain_and_check()
        if outcome.warnings:
            self.logger.warning("\n%s", outcome.warnings.rstrip())
        if outcome.fatal:
            self.logger.error("\n%s", outcome.errors.rstrip())
            raise ValidationError(outcome)

        if self.config.inline_styles:
            # Quick-app styles are emitted together with their owning script.
            styles = []
        transformed = await self.scheduler.run(scripts, styles)

        if entry is None:
            copy_assets(self.config)
            copy_project_config(self.config)

        elapsed = time.perf_counter() - started
        self.logger.info(
            "Build finished in %.2fs (%d transformed, %d unchanged)",
            elapsed,
            len(transformed),
            len(scripts) + len(styles) - len(transformed),
        )
        return BuildReport(
            entry=entry_id,
            transformed=transformed,
            warnings=outcome.warnings,
            events=list(self.scheduler.events),
            elapsed=elapsed,
        )

    async def rebuild(self, changed_path: str) -> BuildReport | None:
        """Watch-mode entry point; a failed pass is logged and never raised."""
        entry = self.watch_resolver.resolve(changed_path)
        self.watch_resolver.invalidate(entry)
        try:
            return await self.build(entry)
        except ValidationError:
            self.logger.info("Build aborted; waiting for the next change")
        except (TransformFailure, ResolutionFailure) as exc:
            self.logger.error("Build aborted: %s", exc)
        return None

    def _classify(self, modules: Iterable[Module]) -> Tuple[List[Module], List[Module]]:
        scripts: List[Module] = []
        styles: List[Module] = []
        for module in modules:
            kind = self.classifier.classify(module)
            if kind is ModuleKind.SCRIPT:
                scripts.append(module)
            elif kind is ModuleKind.STYLE:
                styles.append(module)
        return scripts, styles

    def _log_progress(self, event: BuildEvent) -> None:
        self.logger.info(
            "[%d] build success: %s [%s]",
            event.sequence_index,
            relative_id(str(event.output_path), self.config.root),
            _format_size(event.size_bytes),
        )


def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    return f"{size / 1024:.2f} KiB"


__all__ = ["Orchestrator"]
