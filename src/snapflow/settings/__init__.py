"""Settings for snapflow, built on Pydantic Settings.

Configuration Sources (precedence order):
    1. Environment Variables (highest priority)
    2. ``.env`` file in the working directory
    3. Default Values in code (lowest priority)

Environment Variable Naming:
    - Database: ``SNAPFLOW_DB_<FIELD>`` (e.g. ``SNAPFLOW_DB_HOST``)
    - Reader: ``SNAPFLOW_READER_<FIELD>`` (e.g. ``SNAPFLOW_READER_FETCH_SIZE``)
    - Top level: ``SNAPFLOW_<FIELD>`` (e.g. ``SNAPFLOW_LOG_LEVEL``)

Quick Start:
    >>> from snapflow.settings import get_settings
    >>> settings = get_settings()
    >>> settings.reader.fetch_size
    1000
"""

from .main import _Settings, get_settings, _reload_settings
from .base import SnapflowBaseSettings, validate_sql_identifier
from .database import DatabaseSettings
from .reader import ReaderSettings

__all__ = [
    "get_settings",
    "DatabaseSettings",
    "ReaderSettings",
]
