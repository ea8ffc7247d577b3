"""Configuration for RavenDB and the upstream media catalog."""

import os

from dotenv import load_dotenv

from moviemodeling.constants import (
    DEFAULT_MEDIA_API_BASE_URL,
    DEFAULT_MEDIA_API_TIMEOUT,
    DEFAULT_QUERY_PAGE_SIZE,
    DEFAULT_RAVENDB_DATABASE,
    DEFAULT_RAVENDB_URL,
    DEFAULT_STORE_WAIT_ATTEMPTS,
    DEFAULT_STORE_WAIT_DELAY,
)

# Load environment variables
load_dotenv()


class RavenDBConfig:
    """Configuration class for RavenDB connection details."""

    @staticmethod
    def get_url() -> str:
        """Get the RavenDB server URL from environment variables.

        Returns:
            str: RavenDB server URL (default: http://localhost:8080)
        """
        return os.getenv("RAVENDB_URL", DEFAULT_RAVENDB_URL)

    @staticmethod
    def get_database_name() -> str:
        """Get the RavenDB database name from environment variables.

        Returns:
            str: Database name (default: DataModeling)
        """
        return os.getenv("RAVENDB_DATABASE", DEFAULT_RAVENDB_DATABASE)

    @staticmethod
    def get_page_size() -> int:
        """Get the number of documents fetched per query page."""
        return int(os.getenv("QUERY_PAGE_SIZE", str(DEFAULT_QUERY_PAGE_SIZE)))

    @staticmethod
    def get_wait_attempts() -> int:
        return int(os.getenv("STORE_WAIT_ATTEMPTS", str(DEFAULT_STORE_WAIT_ATTEMPTS)))

    @staticmethod
    def get_wait_delay() -> float:
        return float(os.getenv("STORE_WAIT_DELAY", str(DEFAULT_STORE_WAIT_DELAY)))


class MediaApiConfig:
    """Configuration class for the Battle Cabbage media API."""

    @staticmethod
    def get_base_url() -> str:
        """Get the media API base URL, also used to absolutize poster paths.

        Returns:
            str: Base URL (default: https://api.battlecabbage.com)
        """
        return os.getenv("MEDIA_API_BASE_URL", DEFAULT_MEDIA_API_BASE_URL)

    @staticmethod
    def get_timeout() -> float:
        """Get the HTTP timeout in seconds for catalog requests."""
        return float(os.getenv("MEDIA_API_TIMEOUT", str(DEFAULT_MEDIA_API_TIMEOUT)))
