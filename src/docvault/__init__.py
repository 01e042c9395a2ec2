"""DocVault - filesystem document store with a content-addressed vector cache."""

__version__ = "0.1.0"
