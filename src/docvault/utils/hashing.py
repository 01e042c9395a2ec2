"""Deterministic cache keys for document identifiers."""

from __future__ import annotations

import uuid

DEFAULT_NAMESPACE = uuid.NAMESPACE_URL


def address_of(identifier: str, namespace: uuid.UUID = DEFAULT_NAMESPACE) -> str:
    """Return the name-based (v5) UUID of ``identifier`` as a 36-char string."""
    return str(uuid.uuid5(namespace, identifier))
