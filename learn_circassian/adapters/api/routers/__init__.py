# learn_circassian\adapters\api\routers\__init__.py
"""
API Route Definitions.

This package contains the route handlers (controllers) organized by area.
- `dictionary`: word search and entry lookup (Core Value).
- `store`: first-run setup, store location and status.
- `health`: liveness/readiness checks.
"""

from .dictionary import router as dictionary_router
from .health import router as health_router
from .store import router as store_router

__all__ = [
    "dictionary_router",
    "health_router",
    "store_router",
]
