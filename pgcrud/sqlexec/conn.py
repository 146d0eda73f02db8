"""SQLAlchemy-backed database handle for the CRUD helpers."""

import pandas as pd
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
from sqlalchemy import create_engine, text
from sqlalchemy.pool import QueuePool
from ..sql_builder.adapt_sql import adapt_sql
from .config import DbSettings, get_settings
import logging

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    """Rows returned by a statement and the driver's affected-row count."""
    rows: List[Dict[str, Any]] = field(default_factory=list)
    rowcount: int = -1

    def first(self) -> Optional[Dict[str, Any]]:
        """First row, or None when nothing came back."""
        return self.rows[0] if self.rows else None

    def to_df(self) -> pd.DataFrame:
        """Rows as a DataFrame."""
        return pd.DataFrame(self.rows)


class SqlCon:
    """Database handle over a pooled SQLAlchemy engine.

    ``query`` takes $n placeholder SQL, runs it in its own transaction and
    returns a ``QueryResult``.
    """
    def __init__(
        self, conn: str, pool_size: int = 5, pool_timeout: int = 30,
        echo: bool = False, debug: bool = False
    ):
        self.debug = debug
        self.engine = create_engine(
            conn, poolclass=QueuePool, pool_size=pool_size,
            pool_timeout=pool_timeout, pool_recycle=3600, echo=echo
        )

    @classmethod
    def from_config(cls, settings: Optional[DbSettings] = None) -> 'SqlCon':
        """Create a handle from ``settings``, or from the environment when omitted.

        A malformed ``PGCRUD_*`` variable raises pydantic's ``ValidationError``
        here.
        """
        s = settings if settings is not None else get_settings()
        return cls(
            s.database_url, pool_size=s.pool_size, pool_timeout=s.pool_timeout,
            echo=s.echo, debug=s.debug
        )

    def _log(self, sql: str, params: Any):
        """Log SQL and params if debug enabled."""
        if self.debug:
            logger.debug(f'SQL: {sql} | Params: {params}')

    @contextmanager
    def connect(self):
        """Context-managed connection."""
        conn = self.engine.connect()
        try:
            yield conn
        finally:
            conn.close()

    def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
        """Execute $n placeholder SQL and return its rows."""
        named_sql, named_params = adapt_sql(sql, params or [], 'named')
        self._log(named_sql, named_params)
        with self.engine.begin() as conn:
            result = conn.execute(text(named_sql), named_params)
            rows = [dict(row) for row in result.mappings().all()] if result.returns_rows else []
            return QueryResult(rows=rows, rowcount=result.rowcount)

    def fetch_df(self, sql: str, params: Optional[Sequence[Any]] = None) -> pd.DataFrame:
        """Fetch query results as DataFrame."""
        return self.query(sql, params).to_df()

    def close(self):
        """Dispose of engine resources."""
        self.engine.dispose()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
