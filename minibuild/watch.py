"""Watch-mode rebuild entry resolution and the filesystem event loop."""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .config import DEFAULT_WATCH_IGNORED
from .logging import get_logger
from .stores import ContentCache, DependencyTree

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .orchestrator import Orchestrator

logger = get_logger("watch")


class WatchResolver:
    """Maps a changed file to the module a rebuild pass should start from."""

    def __init__(
        self,
        dependency_tree: DependencyTree,
        cache: ContentCache,
        *,
        redirect_styles: bool = False,
    ) -> None:
        self.dependency_tree = dependency_tree
        self.cache = cache
        self.redirect_styles = redirect_styles

    def resolve(self, changed_path: str) -> str:
        if not self.redirect_styles:
            return changed_path
        owner = self.dependency_tree.owner_of(changed_path)
        if owner is None:
            return changed_path
        logger.debug("Style %s is owned by %s; rebuilding the script", changed_path, owner)
        return owner

    def invalidate(self, entry_id: str) -> None:
        self.cache.invalidate(entry_id)


class ChangeFilter:
    """Drops events for version-control, editor and structured-config files."""

    def __init__(self, ignored: str = DEFAULT_WATCH_IGNORED) -> None:
        self._pattern = re.compile(ignored)

    def accepts(self, path: str) -> bool:
        return not self._pattern.search(path)


class ChangeHandler(FileSystemEventHandler):
    """Forwards accepted file changes from the observer thread into the event loop."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        queue: "asyncio.Queue[str]",
        change_filter: ChangeFilter,
    ) -> None:
        super().__init__()
        self._loop = loop
        self._queue = queue
        self._filter = change_filter

    def on_modified(self, event: FileSystemEvent) -> None:
        self._forward(event)

    def on_created(self, event: FileSystemEvent) -> None:
        self._forward(event)

    def _forward(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        path = str(event.src_path)
        if not self._filter.accepts(path):
            return
        self._loop.call_soon_threadsafe(self._queue.put_nowait, path)


async def _collect_batch(queue: "asyncio.Queue[str]", settle_seconds: float) -> List[str]:
    """Wait for one change, then coalesce whatever arrives while writes settle."""
    batch = [await queue.get()]
    if settle_seconds > 0:
        await asyncio.sleep(settle_seconds)
    while not queue.empty():
        path = queue.get_nowait()
        if path not in batch:
            batch.append(path)
    return batch


async def watch(
    orchestrator: "Orchestrator",
    directory: Optional[Path] = None,
    *,
    stop: Optional[asyncio.Event] = None,
) -> None:
    """Rebuild on every accepted change until ``stop`` is set.

    Passes run strictly one after another; changes that arrive mid-pass wait
    in the queue.
    """
    config = orchestrator.config
    watch_dir = directory or config.entry_path.parent
    loop = asyncio.get_running_loop()
    queue: "asyncio.Queue[str]" = asyncio.Queue()
    handler = ChangeHandler(loop, queue, ChangeFilter(config.watch.ignored))

    observer = Observer()
    observer.schedule(handler, str(watch_dir), recursive=True)
    observer.start()
    logger.info("Watching %s for changes", watch_dir)
    stop = stop or asyncio.Event()
    try:
        while not stop.is_set():
            getter = asyncio.ensure_future(_collect_batch(queue, config.watch.settle_seconds))
            stopper = asyncio.ensure_future(stop.wait())
            done, _ = await asyncio.wait({getter, stopper}, return_when=asyncio.FIRST_COMPLETED)
            if getter not in done:
                getter.cancel()
                break
            stopper.cancel()
            for path in getter.result():
                logger.info("Changed: %s", _relativize(path, config.root))
                await orchestrator.rebuild(path)
            if not observer.is_alive():
                raise RuntimeError("Filesystem observer stopped unexpectedly")
    finally:
        observer.stop()
        observer.join()


def _relativize(path: str, root: Path) -> str:
    try:
        return str(Path(path).relative_to(root))
    except ValueError:
        return path


__all__ = ["ChangeFilter", "ChangeHandler", "WatchResolver", "watch"]
