"""
db/ - Database Layer
====================
Owns the shared PostgreSQL connection pool and the single entry point
for running parameterized queries against it.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""

from db.connection import (
    ConnectionManager,
    close_pool,
    get_connection,
    get_manager,
    get_pool,
    init_pool,
    query,
    release_connection,
)

__all__ = [
    "ConnectionManager",
    "close_pool",
    "get_connection",
    "get_manager",
    "get_pool",
    "init_pool",
    "query",
    "release_connection",
]
