"""Configuration for ddlgen.

Reads from environment variables which can be set directly or loaded from a
.env file in the working directory.

Configuration precedence:
1. Environment variables (highest priority)
2. .env file
3. Defaults defined here (lowest priority)

This module is imported by:
- ddlgen/types.py (tinyint convention for schema parsing)
- ddlgen/generator.py (default dialect)
- ddlgen/database.py (catalog schema filter)
- ddlgen/cli.py (database URL)
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL

# Lazy-loaded flag to avoid loading .env multiple times
_config_loaded = False


def load_config(env_file: Optional[Path] = None) -> None:
    """Load configuration from .env file.
    
    Safe to call multiple times (subsequent calls are no-ops).
    
    Args:
        env_file: Path to .env file. Defaults to .env in the working directory
    """
    global _config_loaded
    if _config_loaded:
        return
    
    if env_file is None:
        env_file = Path.cwd() / ".env"
    
    if env_file.exists():
        load_dotenv(env_file, override=False)
    
    _config_loaded = True


# Auto-load config on import (safe - uses override=False)
load_config()


# =============================================================================
# Helper Functions
# =============================================================================

def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable with fallback."""
    return os.environ.get(key, default)


def _get_env_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    val = os.environ.get(key)
    if val is None or val == "":
        return default
    try:
        return int(val)
    except ValueError:
        return default


def _get_env_bool(key: str, default: bool = True) -> bool:
    """Get boolean from environment variable."""
    val = os.environ.get(key)
    if val is None or val == "":
        return default
    return val.lower() in ("true", "1", "yes", "on")


# =============================================================================
# Core Configuration
# =============================================================================

# sqlglot dialect used for quoting and literals: postgres, mysql, duckdb, ...
DIALECT = _get_env("DDLGEN_DIALECT", "postgres")

# Whether a reported "tinyint" column is parsed as boolean rather than integer
CONVERT_TINYINT_TO_BOOL = _get_env_bool("DDLGEN_CONVERT_TINYINT_TO_BOOL", True)

# Restrict schema introspection to one catalog schema (e.g. "public")
SCHEMA = _get_env("DDLGEN_SCHEMA") or None


# =============================================================================
# Database connection
# =============================================================================

def get_postgres_credentials() -> Dict[str, Any]:
    """Get PostgreSQL connection credentials from environment."""
    return {
        "host": _get_env("DDLGEN_POSTGRES__HOST", "localhost"),
        "port": _get_env_int("DDLGEN_POSTGRES__PORT", 5432),
        "database": _get_env("DDLGEN_POSTGRES__DATABASE", "postgres"),
        "username": _get_env("DDLGEN_POSTGRES__USERNAME", "postgres"),
        "password": _get_env("DDLGEN_POSTGRES__PASSWORD", ""),
    }


def get_database_url() -> str:
    """Get the SQLAlchemy URL of the database to introspect.
    
    DDLGEN_DATABASE_URL wins if set; otherwise a postgresql+psycopg2 URL is
    built from the DDLGEN_POSTGRES__* variables.
    """
    url = _get_env("DDLGEN_DATABASE_URL")
    if url:
        return url
    
    creds = get_postgres_credentials()
    return URL.create(
        "postgresql+psycopg2",
        username=creds["username"],
        password=creds["password"] or None,
        host=creds["host"],
        port=creds["port"],
        database=creds["database"],
    ).render_as_string(hide_password=False)
