"""Transformer contract used by the scheduler."""

from __future__ import annotations

from typing import Awaitable, Protocol, Sequence, Union, runtime_checkable

from ..models import Artifact


class TransformFailure(RuntimeError):
    """Raised when a transformer fails on a specific module."""

    def __init__(self, module_id: str, reason: str) -> None:
        super().__init__(f"Failed to transform {module_id}: {reason}")
        self.module_id = module_id


@runtime_checkable
class Transformer(Protocol):
    """Lowers one module into a target-platform artifact."""

    def transform(
        self,
        module_id: str,
        dependency_ids: Sequence[str],
        raw_source: str,
    ) -> Union[Artifact, Awaitable[Artifact]]:
        """Return the artifact for ``module_id``; may be a coroutine."""
