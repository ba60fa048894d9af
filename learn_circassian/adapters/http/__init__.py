# learn_circassian\adapters\http\__init__.py
"""
Outbound HTTP Adapters.

- HttpAssetFetcher: streams the store file from its release URL.
"""

from .asset_fetcher import HttpAssetFetcher

__all__ = ["HttpAssetFetcher"]
