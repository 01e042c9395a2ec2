"""Core DocVault data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(slots=True)
class DocumentRecord:
    """One ingested document, its body split from the rest of its fields."""

    group: str
    name: str
    content: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    cached: bool | None = None

    @property
    def identifier(self) -> str:
        """Fully-qualified ``group/name`` identifier used for cache addressing."""
        if not self.group:
            return self.name
        return f"{self.group}/{self.name}"

    def to_listing(self) -> Dict[str, Any]:
        """Listing view: metadata without content, plus cache status when known."""
        listing: Dict[str, Any] = {"name": self.name, "type": "file", **self.metadata}
        if self.cached is not None:
            listing["cached"] = self.cached
        return listing


@dataclass(slots=True)
class SourceGroup:
    """Folder of documents directly under the documents root."""

    name: str
    documents: List[DocumentRecord] = field(default_factory=list)


@dataclass(slots=True)
class CacheLookup:
    exists: bool
    chunks: List[Any] = field(default_factory=list)
