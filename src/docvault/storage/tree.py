"""Nested listing of the document tree with cache status."""

from __future__ import annotations

from typing import Any, Dict

from docvault.config import DOCUMENTS_DIRNAME
from docvault.storage.documents import DocumentStore
from docvault.storage.vector_cache import VectorCache


class TreeEnumerator:
    """Combines :meth:`DocumentStore.list` with :meth:`VectorCache.has`.

    The top-level folder is always reported as ``documents``, whatever the
    store's root directory is called.
    """

    def __init__(self, store: DocumentStore, cache: VectorCache) -> None:
        self.store = store
        self.cache = cache

    def enumerate(self) -> Dict[str, Any]:
        directory: Dict[str, Any] = {"name": DOCUMENTS_DIRNAME, "type": "folder", "items": []}
        for group in self.store.list():
            folder: Dict[str, Any] = {"name": group.name, "type": "folder", "items": []}
            for record in group.documents:
                record.cached = self.cache.has(record.identifier)
                folder["items"].append(record.to_listing())
            directory["items"].append(folder)
        return directory
