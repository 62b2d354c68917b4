"""Sequential two-phase transform scheduling."""

from __future__ import annotations

import inspect
from collections import deque
from typing import Callable, Deque, Iterable, List

from .logging import get_logger
from .models import Artifact, BuildEvent, Module
from .stores import ContentCache
from .transformers import TransformFailure, Transformer

PROXY_SENTINEL = "\0"
PROXY_PREFIX = "commonjs-proxy:"

BuildListener = Callable[[BuildEvent], None]


def strip_proxy(module_id: str) -> str:
    """Recover the filesystem id behind a bundler proxy module id."""
    if PROXY_PREFIX not in module_id:
        return module_id
    return module_id.replace(PROXY_PREFIX, "", 1).replace(PROXY_SENTINEL, "")


class TransformScheduler:
    """Drains scripts, then styles, through the transformer one module at a time."""

    def __init__(
        self,
        transformer: Transformer,
        cache: ContentCache,
        listeners: Iterable[BuildListener] | None = None,
    ) -> None:
        self.transformer = transformer
        self.cache = cache
        self.listeners: List[BuildListener] = list(listeners or [])
        self.events: List[BuildEvent] = []
        self.logger = get_logger("scheduler")

    def subscribe(self, listener: BuildListener) -> None:
        self.listeners.append(listener)

    async def run(self, scripts: Iterable[Module], styles: Iterable[Module]) -> List[str]:
        """Transform stale modules and return their ids in processing order."""
        self.events = []
        transformed: List[str] = []
        await self._drain(deque(scripts), transformed, strip=True)
        await self._drain(deque(styles), transformed, strip=False)
        return transformed

    async def _drain(self, queue: Deque[Module], transformed: List[str], *, strip: bool) -> None:
        while queue:
            module = queue.popleft()
            module_id = strip_proxy(module.id) if strip else module.id
            if not self.cache.is_stale(module_id, module.raw_source):
                self.logger.debug(
                    "Skipping unchanged module %s (sha1 %s)",
                    module_id,
                    (self.cache.digest_for(module_id) or "")[:12],
                )
                continue
            artifact = await self._transform(module_id, module)
            transformed.append(module_id)
            if artifact is not None:
                self._notify(artifact)

    async def _transform(self, module_id: str, module: Module) -> Artifact | None:
        try:
            result = self.transformer.transform(module_id, module.dependency_ids, module.raw_source)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            # Only successfully transformed modules may keep a digest.
            self.cache.invalidate(module_id)
            raise TransformFailure(module_id, str(exc)) from exc
        return result

    def _notify(self, artifact: Artifact) -> None:
        event = BuildEvent(
            size_bytes=artifact.size_bytes,
            sequence_index=len(self.events) + 1,
            output_path=artifact.output_path,
        )
        self.events.append(event)
        for listener in self.listeners:
            listener(event)


__all__ = ["BuildListener", "TransformScheduler", "strip_proxy"]
