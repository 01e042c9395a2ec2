"""Path helpers that keep caller-supplied paths inside a storage root."""

from __future__ import annotations

import os
import posixpath
import re
import tempfile
from pathlib import Path

_PARENT_PREFIX = re.compile(r"^(\.\.(/|\\|$))+")


def normalize_path(path: str = "") -> str:
    """Collapse ``.``/``..`` segments and drop any leading parent segments.

    Backslashes count as separators and leading root separators are removed,
    so the result is always relative and never points above the directory it
    is joined to. An empty result is returned as ``""``.
    """
    normalized = posixpath.normpath(path.replace("\\", "/")) if path else "."
    while True:
        stripped = _PARENT_PREFIX.sub("", normalized.lstrip("/"))
        if stripped == normalized:
            break
        normalized = stripped
    return "" if normalized == "." else normalized


def resolve_under(root: Path, path: str) -> Path:
    """Join a sanitized ``path`` onto ``root``."""
    relative = normalize_path(path)
    if not relative:
        return Path(root)
    return Path(root) / relative


def ensure_dir(path: Path) -> Path:
    """Create ``path`` and its parents if missing."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_text_atomic(path: Path, text: str) -> Path:
    """Replace ``path`` with ``text`` through a temp file in the same directory.

    Readers see either the previous file or the complete new one.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path
