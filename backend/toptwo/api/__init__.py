"""
API module.
"""

from .routes import conferences_router, scenarios_router
from .dependencies import get_source, get_cache

__all__ = [
    "conferences_router",
    "scenarios_router",
    "get_source",
    "get_cache",
]
