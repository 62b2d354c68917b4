"""Core data models shared across minibuild components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Tuple


class ModuleKind(str, Enum):
    """Kinds a resolved module can be classified into."""

    SCRIPT = "script"
    STYLE = "style"
    CONFIG = "config"
    IGNORED = "ignored"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    """Diagnostic categories; declaration order is report order."""

    STYLE_IMPORT = "style-import-violation"
    LINE_COUNT = "line-count-violation"
    STRUCTURE = "structure-violation"
    NAMING = "naming-violation"
    SYNTAX = "syntax-violation"


@dataclass(frozen=True)
class Module:
    """One resolved source file plus its direct dependency ids."""

    id: str
    raw_source: str
    dependency_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Diagnostic:
    """Categorized, severity-tagged message produced while validating modules."""

    file_id: str
    severity: Severity
    message: str
    category: Category


@dataclass(frozen=True)
class StyleBinding:
    """Style sheet compiled together with a quick-app script."""

    css_path: str
    css_type: str


@dataclass
class Artifact:
    """Target-platform output returned by a transformer for one module."""

    output_path: Path
    content: str | bytes

    @property
    def size_bytes(self) -> int:
        if isinstance(self.content, bytes):
            return len(self.content)
        return len(self.content.encode("utf-8"))


@dataclass(frozen=True)
class BuildEvent:
    """Progress notification emitted once per produced artifact."""

    size_bytes: int
    sequence_index: int
    output_path: Path


@dataclass
class BuildReport:
    """Summary of a single build pass."""

    entry: str
    transformed: List[str] = field(default_factory=list)
    warnings: str = ""
    events: List[BuildEvent] = field(default_factory=list)
    elapsed: float = 0.0
