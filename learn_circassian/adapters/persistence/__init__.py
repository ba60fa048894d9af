# learn_circassian\adapters\persistence\__init__.py
"""
Persistence Adapters.

Implements the store port over the distributable SQLite file and resolves
where that file lives on the host.

Components:
- SqliteWordStore: read-only, single-connection implementation of IWordStore.
- resolve_store_path / default_store_path: platform-dependent file location.
"""

from .sqlite_store import SqliteWordStore
from .store_paths import default_store_path, resolve_store_path

__all__ = [
    "SqliteWordStore",
    "default_store_path",
    "resolve_store_path",
]
