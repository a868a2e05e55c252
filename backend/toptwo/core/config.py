"""
Application settings read from the environment.
"""

import os

from ..simulator.engine import MAX_UNPLAYED_GAMES
from ..simulator.scenarios import MAX_CONDITION_SIZE


# Directory holding one <conference>.csv schedule per conference
DATA_DIR = os.getenv("TOPTWO_DATA_DIR", "./data")

# Schedule source kind (see sources.get_source)
SOURCE_KIND = os.getenv("TOPTWO_SOURCE", "directory")

# Enumeration and condition search limits
MAX_UNPLAYED = int(os.getenv("TOPTWO_MAX_UNPLAYED_GAMES", str(MAX_UNPLAYED_GAMES)))
MAX_CONDITION = int(os.getenv("TOPTWO_MAX_CONDITION_SIZE", str(MAX_CONDITION_SIZE)))

# In production, replace with specific frontend URL
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

VERSION = "1.0.0"
