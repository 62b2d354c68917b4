"""Long-lived incremental build state."""

from .content_cache import ContentCache
from .dependency_tree import DependencyTree

__all__ = ["ContentCache", "DependencyTree"]
