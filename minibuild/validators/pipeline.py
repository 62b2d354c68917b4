"""Diagnostic aggregation and the fail-fast decision for a build pass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from ..models import Category, Diagnostic, Severity


@dataclass(frozen=True)
class ValidationOutcome:
    """Aggregated reports produced by :meth:`ValidationPipeline.drain_and_check`."""

    errors: str
    warnings: str
    fatal: bool


class ValidationError(RuntimeError):
    """Raised when a build pass collected one or more error diagnostics."""

    def __init__(self, outcome: ValidationOutcome) -> None:
        super().__init__(outcome.errors.strip() or "validation failed")
        self.outcome = outcome


class ValidationPipeline:
    """Collects diagnostics per category until the end of classification."""

    def __init__(self) -> None:
        self._collected: Dict[Category, List[Diagnostic]] = {category: [] for category in Category}

    def record(self, diagnostic: Diagnostic) -> None:
        self._collected[diagnostic.category].append(diagnostic)

    def extend(self, diagnostics: List[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.record(diagnostic)

    def pending(self) -> int:
        return sum(len(items) for items in self._collected.values())

    def drain_and_check(self) -> ValidationOutcome:
        """Render and clear every category; fatal when any error was recorded."""
        error_lines: List[str] = []
        warning_lines: List[str] = []
        for category in Category:
            for diagnostic in self._collected[category]:
                if diagnostic.severity is Severity.ERROR:
                    error_lines.append(f"Error: {diagnostic.message}\n")
                else:
                    warning_lines.append(f"Warning: {diagnostic.message}\n")
            self._collected[category] = []
        errors = "".join(error_lines)
        return ValidationOutcome(
            errors=errors,
            warnings="".join(warning_lines),
            fatal=bool(errors),
        )


__all__ = ["ValidationError", "ValidationOutcome", "ValidationPipeline"]
