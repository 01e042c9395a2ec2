"""Content-addressed cache of pre-computed embedding chunks."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

from docvault.errors import MalformedDocumentError
from docvault.models import CacheLookup
from docvault.utils.hashing import address_of
from docvault.utils.paths import ensure_dir, write_text_atomic

LOGGER = logging.getLogger(__name__)


class VectorCache:
    """Flat directory of ``<key>.json`` chunk arrays.

    Keys come from :func:`address_of` applied to a fully-qualified document
    identifier (``group/name.json``). Entries are independent of the document
    tree: removing a document leaves its cache entry in place.
    """

    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = Path(cache_dir)

    def path_for(self, identifier: str) -> Path:
        return self.cache_dir / f"{address_of(identifier)}.json"

    def has(self, identifier: str | None) -> bool:
        if not identifier:
            return False
        return self.path_for(identifier).is_file()

    def get(self, identifier: str | None) -> CacheLookup:
        if not identifier:
            return CacheLookup(exists=False, chunks=[])

        path = self.path_for(identifier)
        if not path.is_file():
            LOGGER.debug("No cached vectors for %s", identifier)
            return CacheLookup(exists=False, chunks=[])

        LOGGER.info(
            "Cached vectorized results of %s found! Using cached data to save on embed costs.",
            identifier,
        )
        chunks = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(chunks, list):
            raise MalformedDocumentError(f"Cache entry {path.name} is not a JSON array")
        return CacheLookup(exists=True, chunks=chunks)

    def put(self, chunks: Sequence[Any], identifier: str | None) -> Path | None:
        """Store ``chunks`` for ``identifier``, replacing any previous entry."""
        if not identifier:
            return None
        if not isinstance(chunks, (list, tuple)):
            raise TypeError(f"chunks must be a list or tuple, not {type(chunks).__name__}")

        LOGGER.info("Caching vectorized results of %s to prevent duplicated embedding.", identifier)
        data = json.dumps(list(chunks))
        ensure_dir(self.cache_dir)
        return write_text_atomic(self.path_for(identifier), data)

    def remove(self, identifier: str | None) -> bool:
        """Delete the entry for ``identifier``. Returns whether a file was removed."""
        if not identifier:
            return False

        try:
            self.path_for(identifier).unlink()
        except FileNotFoundError:
            return False
        LOGGER.info("Purging vector-cache of %s.", identifier)
        return True
