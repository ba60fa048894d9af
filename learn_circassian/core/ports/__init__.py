# learn_circassian\core\ports\__init__.py
"""
Core Ports (Interfaces).

This package defines the Protocols that the Infrastructure Adapters must
implement. They let the Core Domain read the dictionary store and download
it without knowing about SQLite or HTTP.
"""

from .asset_fetcher import IAssetFetcher
from .word_store import IWordStore

__all__ = [
    "IAssetFetcher",
    "IWordStore",
]
