"""
models/db_config.py
-------------------
Typed configuration record for the PostgreSQL connection pool.
"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_PORT = 5432


@dataclass(frozen=True)
class TlsConfig:
    """
    Transport encryption settings.

    Attributes:
        verify: Whether the server certificate (and host name) must be
            verified before the connection is accepted.
    """
    verify: bool = True

    def connect_kwargs(self) -> dict:
        """
        libpq TLS settings. Verification trusts the system CA store
        (``sslrootcert=system``, libpq 16+) rather than ~/.postgresql/root.crt.
        """
        if not self.verify:
            return {"sslmode": "require"}
        return {"sslmode": "verify-full", "sslrootcert": "system"}


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Connection settings for a single PostgreSQL database.

    Attributes:
        host: Server host name or address.
        port: Server port (default: 5432).
        database: Database name.
        user: Authentication user.
        password: Authentication password.
        tls: TLS settings, or None when no encryption is requested.
    """
    host: Optional[str] = None
    port: int = DEFAULT_PORT
    database: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    tls: Optional[TlsConfig] = None

    def connect_kwargs(self) -> dict:
        """
        Keyword arguments for ``psycopg2.connect``.

        Unset fields are left out so libpq applies its own defaults.
        """
        kwargs = {
            "host": self.host,
            "port": self.port,
            "dbname": self.database,
            "user": self.user,
            "password": self.password,
        }
        kwargs = {key: value for key, value in kwargs.items() if value is not None}
        if self.tls is None:
            kwargs["sslmode"] = "disable"
        else:
            kwargs.update(self.tls.connect_kwargs())
        return kwargs

    def __repr__(self) -> str:
        password = "***" if self.password else None
        return (
            f"DatabaseConfig(host={self.host!r}, port={self.port!r}, "
            f"database={self.database!r}, user={self.user!r}, "
            f"password={password!r}, tls={self.tls!r})"
        )
