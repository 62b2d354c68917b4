"""Project-structure and code-quality rules applied during classification."""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import List

from ..models import Category, Diagnostic, Module, Severity

_IMPORT_PATTERN = re.compile(
    r"^import\s+(?P<bindings>[^'\";]+?)\s+from\s+['\"](?P<source>[^'\"]+)['\"]",
    re.MULTILINE,
)
_STYLE_IMPORT_PATTERN = re.compile(r"^@import\s+([^;]+)", re.MULTILINE | re.IGNORECASE)
_COMPONENTS_SEGMENT = re.compile(r"[/@]components/")
_BINDING_SPLIT = re.compile(r"[\s,{}]+")
_IMPORT_KEYWORD = re.compile(r"^[ \t]*import\b(?![ \t]*[(.])", re.MULTILINE)
_STATIC_IMPORT = re.compile(
    r"[ \t]*import\s*(?:[^'\";]+?\s+from\s+)?['\"][^'\"\n]+['\"]"
)


def relative_id(module_id: str, root: Path | None) -> str:
    """Return ``module_id`` relative to ``root`` in posix form when possible."""
    if root is None:
        return module_id
    try:
        return Path(module_id).relative_to(root).as_posix()
    except ValueError:
        return module_id


def check_import_naming(module: Module, root: Path | None = None) -> List[Diagnostic]:
    """Component imports must target ``<Name>/index`` and bind ``Name``."""
    diagnostics: List[Diagnostic] = []
    for match in _IMPORT_PATTERN.finditer(module.raw_source):
        source = match.group("source")
        if not _COMPONENTS_SEGMENT.search(source):
            continue
        tokens = [token for token in _BINDING_SPLIT.split(match.group("bindings")) if token]
        if not tokens:
            continue
        import_name = tokens[0]
        target = PurePosixPath(source)
        folder_name = target.parent.name
        statement = " ".join(match.group(0).split())

        if target.stem != "index":
            message = f"component file must be named index\nerror at: {statement}"
        elif import_name != folder_name:
            message = (
                "imported component name must match the folder it lives in"
                f"\ne.g. import {folder_name} from '@components/{folder_name}/index'"
                f"\nerror at: {relative_id(module.id, root)}"
            )
        else:
            continue
        diagnostics.append(
            Diagnostic(
                file_id=module.id,
                severity=Severity.ERROR,
                message=message,
                category=Category.NAMING,
            )
        )
    return diagnostics


def check_import_syntax(module: Module, root: Path | None = None) -> List[Diagnostic]:
    """Flag static ``import`` statements the resolver cannot read a specifier from."""
    diagnostics: List[Diagnostic] = []
    rel_id = relative_id(module.id, root)
    source = module.raw_source
    for match in _IMPORT_KEYWORD.finditer(source):
        if _STATIC_IMPORT.match(source, match.start()):
            continue
        line = source.count("\n", 0, match.start()) + 1
        diagnostics.append(
            Diagnostic(
                file_id=rel_id,
                severity=Severity.ERROR,
                message=f"{rel_id}:{line} malformed import statement, please fix.",
                category=Category.SYNTAX,
            )
        )
    return diagnostics


def check_directory_shape(module: Module, root: Path | None = None) -> List[Diagnostic]:
    """A script may live under ``pages`` or ``components`` but never both."""
    rel_id = relative_id(module.id, root)
    parts = list(PurePosixPath(rel_id.replace("\\", "/")).parts)
    if "components" not in parts or "pages" not in parts:
        return []
    if parts.index("components") > parts.index("pages"):
        message = f"{rel_id} must not contain a components directory inside pages, please fix."
    else:
        message = f"{rel_id} must not contain a pages directory inside components, please fix."
    return [
        Diagnostic(
            file_id=rel_id,
            severity=Severity.ERROR,
            message=message,
            category=Category.STRUCTURE,
        )
    ]


def check_line_count(
    module: Module,
    root: Path | None = None,
    *,
    threshold: int = 500,
    runtime_prefix: str = "React",
) -> List[Diagnostic]:
    # The bundled runtime libraries are exempt.
    if runtime_prefix and PurePosixPath(module.id.replace("\\", "/")).name.startswith(runtime_prefix):
        return []
    if module.raw_source.count("\n") <= threshold:
        return []
    rel_id = relative_id(module.id, root)
    return [
        Diagnostic(
            file_id=rel_id,
            severity=Severity.WARNING,
            message=f"{rel_id} must not exceed {threshold} lines, please split it up.",
            category=Category.LINE_COUNT,
        )
    ]


def check_style_import(module: Module, root: Path | None = None) -> List[Diagnostic]:
    """Styles must not ``@import`` component styles; components import their own."""
    offending = [
        line
        for line in _STYLE_IMPORT_PATTERN.findall(module.raw_source)
        if _COMPONENTS_SEGMENT.search(line)
    ]
    if not offending:
        return []
    rel_id = relative_id(module.id, root)
    return [
        Diagnostic(
            file_id=rel_id,
            severity=Severity.ERROR,
            message=(
                f"{rel_id} must not @import component styles; "
                "import them from the component itself, please fix."
            ),
            category=Category.STYLE_IMPORT,
        )
    ]


__all__ = [
    "check_directory_shape",
    "check_import_naming",
    "check_import_syntax",
    "check_line_count",
    "check_style_import",
    "relative_id",
]
