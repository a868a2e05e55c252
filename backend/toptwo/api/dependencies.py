"""
FastAPI dependencies shared by the route modules.
"""

from typing import Tuple
from fastapi import HTTPException, status

from ..core import config
from ..core.cache import ScenarioCache
from ..simulator import Conference
from ..sources import (
    get_source as make_source,
    ScheduleSource,
    ConferenceNotFoundError,
    ScheduleFormatError,
    parse_conference_csv
)


_cache = ScenarioCache()


def get_source() -> ScheduleSource:
    """
    FastAPI dependency for the configured schedule source.

    Tests override this to point at a temporary directory.
    """
    return make_source(config.SOURCE_KIND, config.DATA_DIR)


def get_cache() -> ScenarioCache:
    """FastAPI dependency for the process-wide scenario cache."""
    return _cache


def read_conference(source: ScheduleSource, key: str) -> Tuple[Conference, str]:
    """
    Load a conference and its raw schedule text.

    Raises:
        HTTPException: 404 for an unknown conference, 422 for a bad schedule
    """
    try:
        raw = source.read_schedule(key)
        conference = parse_conference_csv(key.lower(), raw)
    except ConferenceNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Conference {key} not found"
        )
    except ScheduleFormatError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e)
        )
    return conference, raw
