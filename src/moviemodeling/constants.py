"""Application-wide constants and defaults for moviemodeling.

This module provides a single source of truth for configuration defaults,
model names, query kinds and other constants used throughout the application.
"""

# =============================================================================
# Data Models
# =============================================================================
MODEL_NAMES = ("Single", "Embedded", "Reference", "Hybrid")
PARTITION_KEY_PATH = "/title"

# Role markers used in composite person ids
ACTOR_MARKER = "act"
DIRECTOR_MARKER = "dir"

ACTOR_ROLE_NAME = "Actor"
DIRECTOR_ROLE_NAME = "Director"

MOVIE_TYPE = "movie"
PERSON_TYPE = "person"

# =============================================================================
# Query Kinds
# =============================================================================
POINT_READ = "Point Read"
SQL_QUERY = "SQL Query"
QUERY_KINDS = (SQL_QUERY, POINT_READ)

PERSON_SEARCH = "person"

# =============================================================================
# Default URLs and Hosts
# =============================================================================
DEFAULT_RAVENDB_URL = "http://localhost:8080"
DEFAULT_RAVENDB_DATABASE = "DataModeling"
DEFAULT_MEDIA_API_BASE_URL = "https://api.battlecabbage.com"
DEFAULT_API_URL = "http://localhost:5000"

# =============================================================================
# Timeouts, Paging and Retry
# =============================================================================
DEFAULT_MEDIA_API_TIMEOUT = 30  # seconds
DEFAULT_SEED_MOVIE_COUNT = 5
DEFAULT_QUERY_PAGE_SIZE = 100
DEFAULT_STORE_WAIT_ATTEMPTS = 12
DEFAULT_STORE_WAIT_DELAY = 5.0  # seconds

# =============================================================================
# Display Settings
# =============================================================================
CONTENT_PREVIEW_LENGTH = 200  # Characters to show in content previews
