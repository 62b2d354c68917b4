"""Module graph discovery from an entry file."""

from __future__ import annotations

import json
import re
from collections import deque
from pathlib import Path
from typing import Deque, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

from .logging import get_logger
from .models import Module
from .validators import ValidationPipeline, check_import_syntax

_RESOLVE_EXTENSIONS = (".js", ".css", ".scss", ".sass", ".less")
_PARSED_SUFFIXES = {".js"}

_SCRIPT_SPECIFIERS = (
    re.compile(r"^\s*import\s+(?:[^'\";]+?\s+from\s+)?['\"](?P<spec>[^'\"]+)['\"]", re.MULTILINE),
    re.compile(r"^\s*export\s+[^'\";]+?\s+from\s+['\"](?P<spec>[^'\"]+)['\"]", re.MULTILINE),
    re.compile(r"\brequire\(\s*['\"](?P<spec>[^'\"]+)['\"]\s*\)"),
)


class ResolutionFailure(RuntimeError):
    """Raised when an import specifier cannot be mapped to a file."""

    def __init__(self, specifier: str, importer: str | None = None) -> None:
        location = f" (imported from {importer})" if importer else ""
        super().__init__(f"Unable to resolve '{specifier}'{location}")
        self.specifier = specifier
        self.importer = importer


class ModuleResolver(Protocol):
    """Discovers the module graph reachable from an entry file."""

    def resolve(self, entry: str) -> List[Module]:
        """Return modules deduplicated by id in discovery order."""


def _read_source(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def _iter_specifiers(source: str) -> Iterable[str]:
    seen: List[str] = []
    for pattern in _SCRIPT_SPECIFIERS:
        for match in pattern.finditer(source):
            spec = match.group("spec")
            if spec not in seen:
                seen.append(spec)
    return seen


def _candidates(base: Path) -> Iterable[Path]:
    yield base
    for extension in _RESOLVE_EXTENSIONS:
        yield base.with_name(base.name + extension)
    yield base / "index.js"


def _first_file(base: Path) -> Optional[Path]:
    for candidate in _candidates(base):
        if candidate.is_file():
            return candidate.resolve()
    return None


class ImportGraphResolver:
    """Walks static imports breadth-first, honoring aliases and ``node_modules``.

    When a ``diagnostics`` pipeline is supplied, malformed import statements
    found while reading scripts are recorded there as syntax violations.
    """

    def __init__(
        self,
        root: Path,
        aliases: Mapping[str, str] | None = None,
        *,
        extra_entries: Sequence[str] = (),
        diagnostics: ValidationPipeline | None = None,
    ) -> None:
        self.root = root
        self.aliases: Dict[str, Path] = {
            key: (root / target) for key, target in (aliases or {}).items()
        }
        self.extra_entries = list(extra_entries)
        self.diagnostics = diagnostics
        self.logger = get_logger("resolver")

    def resolve(self, entry: str) -> List[Module]:
        entries = [entry, *self.extra_entries]
        modules: Dict[str, Module] = {}
        for item in entries:
            entry_path = _first_file(self._absolute(item))
            if entry_path is None:
                raise ResolutionFailure(item)
            self._walk(entry_path, modules)
        self.logger.debug("Resolved %d modules from %s", len(modules), entry)
        return list(modules.values())

    def resolve_specifier(self, specifier: str, importer: Path) -> Path:
        base = self._base_for(specifier, importer)
        resolved = _first_file(base) if base is not None else None
        if resolved is None:
            raise ResolutionFailure(specifier, str(importer))
        return resolved

    def _walk(self, entry_path: Path, modules: Dict[str, Module]) -> None:
        queue: Deque[Path] = deque([entry_path])
        while queue:
            path = queue.popleft()
            module_id = str(path)
            if module_id in modules:
                continue
            source = _read_source(path)
            dependencies: List[str] = []
            # Style contents are never parsed; their edges stay one level deep.
            if path.suffix in _PARSED_SUFFIXES:
                if self.diagnostics is not None:
                    self.diagnostics.extend(
                        check_import_syntax(Module(id=module_id, raw_source=source), self.root)
                    )
                for specifier in _iter_specifiers(source):
                    resolved = self.resolve_specifier(specifier, path)
                    if str(resolved) not in dependencies:
                        dependencies.append(str(resolved))
                    queue.append(resolved)
            modules[module_id] = Module(
                id=module_id,
                raw_source=source,
                dependency_ids=tuple(dependencies),
            )

    def _absolute(self, item: str) -> Path:
        path = Path(item)
        return path if path.is_absolute() else self.root / path

    def _base_for(self, specifier: str, importer: Path) -> Optional[Path]:
        for alias, target in self.aliases.items():
            if specifier == alias:
                return target
            if specifier.startswith(alias + "/"):
                return target / specifier[len(alias) + 1 :]
        if specifier.startswith("."):
            return importer.parent / specifier
        if specifier.startswith("/"):
            return Path(specifier)
        return self._package_base(specifier)

    def _package_base(self, specifier: str) -> Optional[Path]:
        parts = specifier.split("/")
        name_parts = 2 if specifier.startswith("@") else 1
        package_dir = self.root / "node_modules" / "/".join(parts[:name_parts])
        if not package_dir.is_dir():
            return None
        subpath = parts[name_parts:]
        if subpath:
            return package_dir.joinpath(*subpath)
        return package_dir / _package_main(package_dir)


def _package_main(package_dir: Path) -> str:
    try:
        manifest = json.loads((package_dir / "package.json").read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return "index.js"
    if not isinstance(manifest, dict):
        return "index.js"
    for key in ("module", "main"):
        value = manifest.get(key)
        if isinstance(value, str) and value:
            return value
    return "index.js"


__all__ = ["ImportGraphResolver", "ModuleResolver", "ResolutionFailure"]
