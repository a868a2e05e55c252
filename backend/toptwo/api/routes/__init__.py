"""
API route modules.
"""

from .conferences_routes import router as conferences_router
from .scenarios_routes import router as scenarios_router

__all__ = ["conferences_router", "scenarios_router"]
