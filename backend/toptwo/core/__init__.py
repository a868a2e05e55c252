"""
Core utilities: settings, conference metadata and the scenario cache.
"""

from .conferences import ConferenceKey, DISPLAY_NAMES, get_display_name
from .cache import ScenarioCache, CachedScenarios, content_hash

__all__ = [
    "ConferenceKey",
    "DISPLAY_NAMES",
    "get_display_name",
    "ScenarioCache",
    "CachedScenarios",
    "content_hash",
]
