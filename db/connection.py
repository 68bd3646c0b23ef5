"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so several threads can query at once.

`ConnectionManager` owns one pool built from a DatabaseConfig. The module-level
functions below keep a single manager for the whole process:

    uninitialized -> pool constructed -> accepting queries

psycopg2 pools fail immediately when every connection is out, so borrowing
goes through a semaphore sized to `max_conn`: callers wait for a free
connection instead.

Every driver error is logged and re-raised unchanged.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

import psycopg2
from psycopg2.pool import PoolError, ThreadedConnectionPool

from config import DB_POOL_MAX, DB_POOL_MIN, DB_POOL_TIMEOUT, load_db_config
from models.db_config import DatabaseConfig
from models.query_result import QueryResult
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionManager:
    """Lazily builds one connection pool and runs parameterized queries on it."""

    def __init__(
        self,
        config: DatabaseConfig,
        min_conn: int = DB_POOL_MIN,
        max_conn: int = DB_POOL_MAX,
        timeout: Optional[float] = DB_POOL_TIMEOUT,
    ) -> None:
        self.config = config
        self.min_conn = min_conn
        self.max_conn = max_conn
        self.timeout = timeout
        self._pool: ThreadedConnectionPool | None = None
        self._lock = threading.Lock()
        self._slots = threading.BoundedSemaphore(max_conn)
        # id(conn) -> pool it was borrowed from
        self._borrowed: dict[int, ThreadedConnectionPool] = {}

    @property
    def is_initialized(self) -> bool:
        return self._pool is not None

    @property
    def pool(self) -> ThreadedConnectionPool:
        """
        The underlying pool, constructed on first access.

        Raises:
            psycopg2.OperationalError: If the initial connections cannot be opened.
        """
        if self._pool is None:
            with self._lock:
                if self._pool is None:
                    self._pool = self._create_pool()
        return self._pool

    def _create_pool(self) -> ThreadedConnectionPool:
        try:
            created = ThreadedConnectionPool(
                self.min_conn, self.max_conn, **self.config.connect_kwargs()
            )
        except psycopg2.Error as e:
            logger.error(f"Failed to initialize database pool for {self.config.host}: {e}")
            raise
        logger.info(
            f"Database connection pool initialized "
            f"({self.config.host}:{self.config.port}/{self.config.database}, "
            f"min={self.min_conn}, max={self.max_conn})."
        )
        return created

    def _borrow(self, autocommit: bool):
        owner = self.pool
        if not self._slots.acquire(timeout=self.timeout):
            raise PoolError(f"timed out after {self.timeout}s waiting for a free connection")
        try:
            conn = owner.getconn()
            conn.autocommit = autocommit
        except BaseException:
            self._slots.release()
            raise
        with self._lock:
            self._borrowed[id(conn)] = owner
        return conn

    def get_connection(self):
        """
        Borrow a transactional connection from the pool.

        Blocks while all `max_conn` connections are in use.

        Raises:
            psycopg2.pool.PoolError: If no connection frees up within `timeout`.
        """
        return self._borrow(autocommit=False)

    def release_connection(self, conn) -> None:
        """Return a borrowed connection to the pool it came from."""
        with self._lock:
            owner = self._borrowed.pop(id(conn), None)
        if owner is None:
            return
        try:
            if owner.closed:
                conn.close()
            else:
                owner.putconn(conn)
        finally:
            self._slots.release()

    @contextmanager
    def connection(self) -> Iterator:
        """Borrow a transactional connection for the duration of a `with` block."""
        conn = self.get_connection()
        try:
            yield conn
        finally:
            self.release_connection(conn)

    def execute_query(self, text: str, params: Optional[Sequence] = None) -> QueryResult:
        """
        Run one statement on a pooled connection, outside any transaction.

        Args:
            text: SQL with positional ``%s`` placeholders.
            params: Values bound to the placeholders, in order.

        Returns:
            A QueryResult with the fetched rows and statement metadata.

        Raises:
            psycopg2.Error: Whatever the driver or the pool raised, unchanged.
        """
        conn = self._borrow(autocommit=True)
        try:
            with conn.cursor() as cur:
                logger.debug(f"Executing query: {text}")
                cur.execute(text, params)
                return QueryResult.from_cursor(cur)
        except Exception as e:
            logger.error(f"Query failed: {e}")
            raise
        finally:
            self.release_connection(conn)

    def close(self) -> None:
        """
        Close all connections in the pool. Safe to call more than once.

        Connections still borrowed are closed when they are released.
        """
        with self._lock:
            if self._pool is None:
                return
            self._pool.closeall()
            self._pool = None
        logger.info("Database connection pool closed.")


# ── Process-wide pool ─────────────────────────────────────

_manager: ConnectionManager | None = None
_manager_lock = threading.Lock()


def init_pool(
    config: Optional[DatabaseConfig] = None,
    min_conn: int = DB_POOL_MIN,
    max_conn: int = DB_POOL_MAX,
) -> ConnectionManager:
    """
    Initialize the process-wide connection pool.

    Args:
        config: Connection settings. Read from the environment when omitted.
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Returns:
        The shared ConnectionManager. If the pool already exists it is
        returned as is and the arguments are ignored.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _manager
    with _manager_lock:
        if _manager is None:
            manager = ConnectionManager(
                config if config is not None else load_db_config(),
                min_conn=min_conn,
                max_conn=max_conn,
            )
            manager.pool  # open the initial connections now
            _manager = manager
        return _manager


def get_manager() -> ConnectionManager:
    """Return the shared manager, initializing it on first use."""
    if _manager is None:
        return init_pool()
    return _manager


def get_pool() -> ThreadedConnectionPool:
    """
    Return the shared psycopg2 pool for direct use.

    Connections taken straight from it bypass the wait queue; prefer
    get_connection() / release_connection().
    """
    return get_manager().pool


def query(text: str, params: Optional[Sequence] = None) -> QueryResult:
    """Run a parameterized query on the shared pool."""
    return get_manager().execute_query(text, params)


def get_connection():
    """
    Get a connection from the shared pool.

    Returns:
        A psycopg2 connection object. Pass it back with release_connection().
    """
    return get_manager().get_connection()


def release_connection(conn) -> None:
    """
    Return a connection back to the shared pool.

    Args:
        conn: The psycopg2 connection to release.
    """
    if _manager is not None:
        _manager.release_connection(conn)


def close_pool() -> None:
    """Close all connections in the shared pool."""
    global _manager
    with _manager_lock:
        manager, _manager = _manager, None
    if manager is not None:
        manager.close()
