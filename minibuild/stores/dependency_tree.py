"""Script to style dependency bookkeeping for watch-mode rebuilds."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple


class DependencyTree:
    """Maps a script module id to the style ids it imports directly."""

    def __init__(self) -> None:
        self._edges: Dict[str, List[str]] = {}

    def record(self, script_id: str, style_ids: Iterable[str]) -> None:
        """Replace the style edges of ``script_id`` with its current direct imports.

        A script that no longer imports any style is dropped from the tree.
        """
        styles: List[str] = []
        for style_id in style_ids:
            if style_id not in styles:
                styles.append(style_id)
        if styles:
            self._edges[script_id] = styles
        else:
            self._edges.pop(script_id, None)

    def owner_of(self, style_id: str) -> Optional[str]:
        """Return the first script (in recording order) importing ``style_id``."""
        for script_id, styles in self._edges.items():
            if style_id in styles:
                return script_id
        return None

    def styles_for(self, script_id: str) -> Tuple[str, ...]:
        return tuple(self._edges.get(script_id, ()))

    def clear(self) -> None:
        self._edges.clear()

    def __contains__(self, script_id: object) -> bool:
        return script_id in self._edges

    def __len__(self) -> int:
        return len(self._edges)


__all__ = ["DependencyTree"]
