"""On-disk persistence for bot data collections."""

from .json_store import JsonStore, StorageError

__all__ = ["JsonStore", "StorageError"]
