"""SQL Builder subpackage for generating CRUD SQL and positional parameters."""

from .query_builder import SQLBuilder, BuiltQuery, build_query, OPERATIONS
from .adapt_sql import adapt_sql

__all__ = [
    'SQLBuilder',
    'BuiltQuery',
    'build_query',
    'OPERATIONS',
    'adapt_sql'
]
