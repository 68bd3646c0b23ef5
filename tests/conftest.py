from unittest.mock import MagicMock

import pytest

import db.connection
from models.db_config import DatabaseConfig


@pytest.fixture(autouse=True)
def reset_shared_manager(monkeypatch):
    """Each test starts with no process-wide pool."""
    monkeypatch.setattr(db.connection, "_manager", None)


@pytest.fixture
def db_config():
    return DatabaseConfig(host="localhost", port=5432, database="app", user="u", password="p")


@pytest.fixture
def mock_cursor():
    """A cursor that has just run `SELECT 1 AS one`."""
    cursor = MagicMock()
    cursor.description = [("one", 23, None, 4, None, None, None)]
    cursor.fetchall.return_value = [(1,)]
    cursor.rowcount = 1
    cursor.statusmessage = "SELECT 1"
    return cursor


@pytest.fixture
def mock_conn(mock_cursor):
    conn = MagicMock()
    conn.closed = 0
    conn.cursor.return_value.__enter__.return_value = mock_cursor
    conn.cursor.return_value.__exit__.return_value = None
    return conn


@pytest.fixture
def mock_pool_cls(mocker, mock_conn):
    """
    Patch ThreadedConnectionPool inside db.connection so no real
    connection is attempted. Every pool hands out `mock_conn`.
    """
    pool_cls = mocker.patch("db.connection.ThreadedConnectionPool")
    pool_cls.return_value.closed = False
    pool_cls.return_value.getconn.return_value = mock_conn
    return pool_cls
