"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.

Database settings are read on demand through `load_db_config()` so
that callers (and tests) can pass an alternate mapping instead of
the process environment.
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv

from models.db_config import DEFAULT_PORT, DatabaseConfig, TlsConfig

load_dotenv()


# ── Pool sizing ───────────────────────────────────────────
DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "10"))
# Seconds to wait for a free connection; unset waits indefinitely.
_raw_timeout = os.getenv("DB_POOL_TIMEOUT", "")
DB_POOL_TIMEOUT: Optional[float] = float(_raw_timeout) if _raw_timeout else None

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


# ── PostgreSQL ────────────────────────────────────────────

def _parse_port(raw: Optional[str]) -> int:
    if not raw:
        return DEFAULT_PORT
    return int(raw)


def _parse_tls(environ: Mapping[str, str]) -> Optional[TlsConfig]:
    """
    Build the TLS section from DB_SSL / DB_SSL_REJECT_UNAUTHORIZED.

    Only the exact string "true" turns TLS on, and only the exact
    string "false" turns certificate verification off.
    """
    if environ.get("DB_SSL") != "true":
        return None
    return TlsConfig(verify=environ.get("DB_SSL_REJECT_UNAUTHORIZED") != "false")


def load_db_config(environ: Optional[Mapping[str, str]] = None) -> DatabaseConfig:
    """
    Read the database configuration.

    Args:
        environ: Source of settings. Defaults to ``os.environ``.

    Returns:
        An immutable DatabaseConfig. Missing values are left as None.

    Raises:
        ValueError: If DB_PORT is set but not an integer.
    """
    if environ is None:
        environ = os.environ
    return DatabaseConfig(
        host=environ.get("DB_HOST"),
        port=_parse_port(environ.get("DB_PORT")),
        database=environ.get("DB_NAME"),
        user=environ.get("DB_USER"),
        password=environ.get("DB_PASS"),
        tls=_parse_tls(environ),
    )
