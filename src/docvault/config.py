"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from docvault.storage.documents import DEFAULT_CONTENT_KEY

STORAGE_DIR_ENV = "DOCVAULT_STORAGE_DIR"
MODE_ENV = "DOCVAULT_ENV"

DOCUMENTS_DIRNAME = "documents"
VECTOR_CACHE_DIRNAME = "vector-cache"


def _is_development() -> bool:
    return os.environ.get(MODE_ENV, "").strip().lower() == "development"


def _get_default_storage_root(development: bool) -> Path:
    """Get the default storage root based on mode and environment."""
    local_root = Path("storage")

    # Development always works against the checkout-local tree
    if development:
        return local_root

    configured = os.environ.get(STORAGE_DIR_ENV)
    if configured:
        return Path(configured).expanduser()

    if local_root.exists():
        return local_root

    return Path.home() / "Documents" / "DocVault" / "storage"


@dataclass(slots=True)
class AppConfig:
    storage_root: Path | None = None
    development: bool = field(default_factory=_is_development)
    content_key: str = DEFAULT_CONTENT_KEY

    def __post_init__(self) -> None:
        if self.storage_root is None:
            self.storage_root = _get_default_storage_root(self.development)

    def resolve_storage_root(self, base_dir: Path | None = None) -> Path:
        if self.storage_root is None:
            self.storage_root = _get_default_storage_root(self.development)
        if Path(self.storage_root).is_absolute() or base_dir is None:
            return Path(self.storage_root)
        return base_dir / self.storage_root

    def documents_dir(self, base_dir: Path | None = None) -> Path:
        return self.resolve_storage_root(base_dir) / DOCUMENTS_DIRNAME

    def vector_cache_dir(self, base_dir: Path | None = None) -> Path:
        return self.resolve_storage_root(base_dir) / VECTOR_CACHE_DIRNAME
