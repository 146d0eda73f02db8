"""Raw psycopg2 database handle for the CRUD helpers."""

import psycopg2
from sqlalchemy.engine.url import make_url
from typing import Any, Optional, Sequence
from ..sql_builder.adapt_sql import adapt_sql
from .conn import QueryResult
import logging

logger = logging.getLogger(__name__)


class PgCon:
    """Database handle over a single psycopg2 connection."""
    def __init__(self, conn):
        self.conn = conn

    @classmethod
    def from_url(cls, url: str, sslmode: str = 'prefer') -> 'PgCon':
        """Connect with psycopg2 using a SQLAlchemy-style URL."""
        u = make_url(url)
        return cls(psycopg2.connect(
            dbname=u.database, user=u.username, password=u.password,
            host=u.host, port=u.port or 5432, sslmode=sslmode
        ))

    def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
        """Execute $n placeholder SQL in its own transaction and return its rows."""
        fmt_sql, ordered = adapt_sql(sql, params or [], 'format')
        logger.debug(f'SQL: {fmt_sql} | Params: {ordered}')
        try:
            with self.conn.cursor() as cur:
                cur.execute(fmt_sql, ordered)
                rows = cur.fetchall() if cur.description else []
                cols = [d[0] for d in cur.description] if cur.description else []
                rowcount = cur.rowcount
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        return QueryResult(rows=[dict(zip(cols, row)) for row in rows], rowcount=rowcount)

    def close(self):
        """Close the underlying connection."""
        self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
