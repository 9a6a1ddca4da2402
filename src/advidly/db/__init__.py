"""Storage layer."""

from advidly.db.storage import DuplicateProfileError, MemStorage, NotFoundError

__all__ = ["DuplicateProfileError", "MemStorage", "NotFoundError"]
