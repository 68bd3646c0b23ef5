"""
models/query_result.py
----------------------
Result set returned by a single query execution.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class QueryResult:
    """
    Rows and metadata produced by one statement.

    Attributes:
        rows: Fetched rows as tuples (empty for statements without a result set).
        columns: Column names, in row order.
        rowcount: Rows returned or affected, as reported by the driver.
        status: Command status reported by the server (e.g. 'SELECT 1').
    """
    rows: list = field(default_factory=list)
    columns: list = field(default_factory=list)
    rowcount: int = -1
    status: Optional[str] = None

    @classmethod
    def from_cursor(cls, cursor) -> "QueryResult":
        """Build a result from a cursor that has just executed a statement."""
        if cursor.description is None:
            return cls(rowcount=cursor.rowcount, status=cursor.statusmessage)
        return cls(
            rows=list(cursor.fetchall()),
            columns=[col[0] for col in cursor.description],
            rowcount=cursor.rowcount,
            status=cursor.statusmessage,
        )

    def scalar(self) -> Any:
        """First column of the first row, or None if there are no rows."""
        if not self.rows:
            return None
        return self.rows[0][0]

    def as_dicts(self) -> list[dict]:
        return [dict(zip(self.columns, row)) for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)
