"""Configuration for ddlgen.

Reads from environment variables which can be set directly or loaded from a
.env file.

Usage:
    from ddlgen.config import DIALECT, CONVERT_TINYINT_TO_BOOL, get_database_url
"""

from .config import (
    # Core config values
    DIALECT,
    CONVERT_TINYINT_TO_BOOL,
    SCHEMA,
    # Connection
    get_postgres_credentials,
    get_database_url,
    # Helpers
    load_config,
)

__all__ = [
    # Core config
    "DIALECT",
    "CONVERT_TINYINT_TO_BOOL",
    "SCHEMA",
    # Connection
    "get_postgres_credentials",
    "get_database_url",
    # Helpers
    "load_config",
]
