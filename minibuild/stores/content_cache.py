"""Content-hash cache deciding which modules need re-transformation."""

from __future__ import annotations

import hashlib
from typing import Dict, Optional


def content_digest(raw_source: str) -> str:
    return hashlib.sha1(raw_source.encode("utf-8")).hexdigest()


class ContentCache:
    """Maps a module id to the digest of its last transformed source.

    Entries live for the lifetime of the owning orchestrator; they are only
    dropped through :meth:`invalidate` or :meth:`clear`.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}

    def is_stale(self, module_id: str, raw_source: str) -> bool:
        """Return True when the source differs from the cached digest.

        A True verdict commits the new digest, so call this once per module
        per pass, right before transforming it.
        """
        digest = content_digest(raw_source)
        if self._entries.get(module_id) == digest:
            return False
        self._entries[module_id] = digest
        return True

    def invalidate(self, module_id: str) -> None:
        self._entries.pop(module_id, None)

    def digest_for(self, module_id: str) -> Optional[str]:
        return self._entries.get(module_id)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ContentCache", "content_digest"]
