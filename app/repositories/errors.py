"""
Repository-layer exceptions for inventory store operations.
"""

from __future__ import annotations


class InventoryStoreError(Exception):
    """Base exception for inventory store failures."""


class PersistenceError(InventoryStoreError):
    """Raised when the store rejects one write; later writes may still succeed."""


class StoreUnavailableError(InventoryStoreError):
    """Raised when the store cannot be reached; no further writes can succeed."""
