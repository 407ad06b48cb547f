"""Storage module for HabitFlow.

Persists habit state and the insight cache in a versioned JSON file.
"""

from .store import HabitStore, StorageError, migrate_document

__all__ = ["HabitStore", "StorageError", "migrate_document"]
