"""Transformer plugins and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Dict, Iterable

from ..config import BuildConfig
from .base import TransformFailure, Transformer
from .passthrough import CopyTransformer

_ENTRY_POINT_GROUP = "minibuild.transformers"

TransformerFactory = Callable[[BuildConfig], Transformer]

_BUILTIN_FACTORIES: Dict[str, TransformerFactory] = {
    "copy": CopyTransformer.from_config,
}


def discover_transformer(name: str, config: BuildConfig) -> Transformer:
    """Instantiate the transformer registered under ``name``."""
    key = name.lower()
    factory = _BUILTIN_FACTORIES.get(key)
    if factory is None:
        for entry in _iter_entry_points():
            if entry.name.lower() != key:
                continue
            try:
                factory = entry.load()
            except Exception as exc:  # pragma: no cover - depends on installed plugins
                raise RuntimeError(f"Failed to load transformer entry point '{name}': {exc}") from exc
            break
    if factory is None:
        raise ValueError(f"Unknown transformer requested: {name}")
    instance = factory(config)
    if not isinstance(instance, Transformer):
        raise TypeError(f"Transformer factory for '{name}' did not return a Transformer")
    return instance


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "CopyTransformer",
    "TransformFailure",
    "Transformer",
    "discover_transformer",
]
