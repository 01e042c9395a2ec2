"""Exceptions raised by DocVault storage components."""

from __future__ import annotations


class DocVaultError(Exception):
    """Base class for DocVault errors."""


class MissingPathError(DocVaultError, ValueError):
    """A required document path was not provided."""


class MalformedDocumentError(DocVaultError, ValueError):
    """A stored file parsed as JSON but does not have the expected shape."""


class InvalidDocumentPathError(DocVaultError, ValueError):
    """A document path does not fit the ``<group>/<name>.json`` layout."""
