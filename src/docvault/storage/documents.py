"""Filesystem tree of ingested document records."""

from __future__ import annotations

import json
import logging
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Mapping

from docvault.errors import InvalidDocumentPathError, MalformedDocumentError, MissingPathError
from docvault.models import DocumentRecord, SourceGroup
from docvault.storage.vector_cache import VectorCache
from docvault.utils.paths import ensure_dir, normalize_path, resolve_under, write_text_atomic

LOGGER = logging.getLogger(__name__)

DEFAULT_CONTENT_KEY = "content"


class DocumentStore:
    """Two-level ``<group>/<name>.json`` tree rooted at ``root``.

    Every caller-supplied path goes through :func:`normalize_path` before it
    touches the filesystem. When a :class:`VectorCache` is attached, :meth:`find`
    reports whether the matched document already has cached chunks.
    """

    def __init__(
        self,
        root: Path,
        *,
        cache: VectorCache | None = None,
        content_key: str = DEFAULT_CONTENT_KEY,
    ) -> None:
        self.root = Path(root)
        self.cache = cache
        self.content_key = content_key

    def _load(self, path: Path, group: str, name: str) -> DocumentRecord:
        payload = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise MalformedDocumentError(f"Document {group}/{name} is not a JSON object")
        content = payload.pop(self.content_key, "")
        return DocumentRecord(group=group, name=name, content=content, metadata=payload)

    def get(self, path: str | None) -> DocumentRecord | None:
        """Load the record at ``group/name.json``, or ``None`` if it does not exist."""
        if not path:
            raise MissingPathError("No document path provided")

        relative = normalize_path(path)
        target = resolve_under(self.root, relative)
        if not relative or not target.is_file():
            return None

        parts = PurePosixPath(relative)
        group = "" if str(parts.parent) == "." else str(parts.parent)
        return self._load(target, group, parts.name)

    def list(self) -> List[SourceGroup]:
        """Collect the ``.json`` members of every group folder."""
        ensure_dir(self.root)

        groups: List[SourceGroup] = []
        for entry in sorted(self.root.iterdir()):
            if entry.suffix == ".md":
                continue
            if entry.is_symlink() or not entry.is_dir():
                LOGGER.debug("Skipping non-folder entry %s", entry.name)
                continue

            group = SourceGroup(name=entry.name)
            for member in sorted(entry.iterdir()):
                if member.suffix != ".json" or not member.is_file():
                    continue
                group.documents.append(self._load(member, entry.name, member.name))
            groups.append(group)
        return groups

    def find(self, name: str | None) -> DocumentRecord | None:
        """Return the first group member called ``name``.

        Groups are scanned in sorted order and scanning stops at the first
        hit, so a name present in several groups resolves to the first group.
        """
        if not name:
            return None
        target_name = normalize_path(name)
        if not target_name or not self.root.is_dir():
            return None

        for folder in sorted(self.root.iterdir()):
            if folder.is_symlink() or not folder.is_dir():
                continue
            candidate = folder / target_name
            if not candidate.is_file():
                continue

            record = self._load(candidate, folder.name, target_name)
            record.cached = self.cache.has(record.identifier) if self.cache else False
            return record
        return None

    def write(
        self,
        group: str,
        name: str,
        content: str,
        metadata: Mapping[str, Any] | None = None,
    ) -> DocumentRecord:
        """Write a whole record, replacing any existing file with the same identity."""
        safe_group = normalize_path(group)
        safe_name = normalize_path(name)
        if not safe_group or not safe_name:
            raise MissingPathError("Both a group and a document name are required")
        # Groups nest one level only and list() collects .json members only
        if "/" in safe_group or "/" in safe_name:
            raise InvalidDocumentPathError(
                f"Document path {safe_group}/{safe_name} must be <group>/<name>.json"
            )
        if not safe_name.endswith(".json"):
            raise InvalidDocumentPathError(f"Document name {safe_name} must end in .json")

        payload: Dict[str, Any] = dict(metadata or {})
        payload[self.content_key] = content
        target = resolve_under(self.root, f"{safe_group}/{safe_name}")
        ensure_dir(target.parent)
        write_text_atomic(target, json.dumps(payload, ensure_ascii=False))
        LOGGER.info("Stored source document %s/%s.", safe_group, safe_name)

        metadata_only = {k: v for k, v in payload.items() if k != self.content_key}
        return DocumentRecord(group=safe_group, name=safe_name, content=content, metadata=metadata_only)

    def remove(self, path: str | None) -> bool:
        """Delete the record at ``path``. Returns whether a file was removed."""
        if not path:
            return False
        relative = normalize_path(path)
        target = resolve_under(self.root, relative)
        if not relative or not target.is_file():
            return False

        LOGGER.info("Purging source document of %s.", relative)
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        return True
