"""Shared pytest fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docvault.storage.documents import DocumentStore
from docvault.storage.vector_cache import VectorCache


def write_doc(root: Path, group: str, name: str, **fields) -> Path:
    """Write a document record as ``root/group/name``."""
    folder = root / group
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / name
    path.write_text(json.dumps(fields), encoding="utf-8")
    return path


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    return tmp_path / "storage"


@pytest.fixture
def vector_cache(storage_root: Path) -> VectorCache:
    return VectorCache(storage_root / "vector-cache")


@pytest.fixture
def document_store(storage_root: Path, vector_cache: VectorCache) -> DocumentStore:
    return DocumentStore(storage_root / "documents", cache=vector_cache)


@pytest.fixture
def populated_store(document_store: DocumentStore) -> DocumentStore:
    """Groups ``yt`` (a.json, b.json) and ``web`` (c.json) plus a root note."""
    root = document_store.root
    write_doc(root, "yt", "a.json", content="alpha body", title="Alpha", url="https://yt/a")
    write_doc(root, "yt", "b.json", content="beta body", title="Beta")
    write_doc(root, "web", "c.json", content="gamma body", title="Gamma", wordCount=3)
    (root / "README.md").write_text("notes", encoding="utf-8")
    return document_store
