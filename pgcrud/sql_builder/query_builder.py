"""SQL query builder for INSERT, SELECT, UPDATE and DELETE with $n placeholders.

Table and column names are interpolated into the SQL text as-is and must come
from trusted code. Only values are bound as parameters.
"""

from typing import Any, List, Mapping, NamedTuple, Optional, Sequence, Tuple
import logging
from ..errors import InvalidOperation, MissingReturnFields

logger = logging.getLogger(__name__)

OPERATIONS = ('insert', 'select', 'update', 'delete')


class BuiltQuery(NamedTuple):
    """SQL text and the values bound to $1, $2, ... in order."""
    sql: str
    params: List[Any]


class SQLBuilder:
    """Builds CRUD statements with contiguous positional placeholders."""

    def _returning(self, return_fields: Sequence[str]) -> str:
        """RETURNING clause, or nothing when no fields are requested."""
        return f' RETURNING {", ".join(return_fields)}' if return_fields else ''

    def _conditions(self, match_fields: Mapping[str, Any], start: int = 1) -> Tuple[str, List[Any]]:
        """Equality conditions joined with AND, numbered from ``start``."""
        parts = [f'{k}=${i}' for i, k in enumerate(match_fields, start)]
        return ' AND '.join(parts), list(match_fields.values())

    def insert(self, table: str, fields: Mapping[str, Any], return_fields: Sequence[str] = (),
               conflict_action: str = '') -> BuiltQuery:
        """Generate INSERT query for a single row."""
        params: List[Any] = []
        if not fields:
            sql = f'INSERT INTO {table} DEFAULT VALUES'
        else:
            phs = ', '.join(f'${i}' for i in range(1, len(fields) + 1))
            sql = f'INSERT INTO {table} ({", ".join(fields)}) VALUES ({phs})'
            params = list(fields.values())
        if conflict_action:
            sql += f' {conflict_action}'
        sql += self._returning(return_fields)
        return BuiltQuery(sql, params)

    def select(self, table: str, return_fields: Sequence[str],
               match_fields: Optional[Mapping[str, Any]] = None) -> BuiltQuery:
        """Generate SELECT query; ``['*']`` selects every column."""
        if not return_fields:
            raise MissingReturnFields("You must provide return fields. For all fields, use ['*']")
        sql = f'SELECT {", ".join(return_fields)} FROM {table}'
        params: List[Any] = []
        if match_fields:
            where, params = self._conditions(match_fields)
            sql += f' WHERE {where}'
        return BuiltQuery(sql, params)

    def update(self, table: str, fields: Mapping[str, Any], match_fields: Optional[Mapping[str, Any]] = None,
               return_fields: Sequence[str] = ()) -> BuiltQuery:
        """Generate UPDATE query; WHERE numbering continues after the SET values."""
        sets = ', '.join(f'{k}=${i}' for i, k in enumerate(fields, 1))
        sql = f'UPDATE {table} SET {sets}'
        params = list(fields.values())
        if match_fields:
            where, match_params = self._conditions(match_fields, start=len(params) + 1)
            sql += f' WHERE {where}'
            params.extend(match_params)
        sql += self._returning(return_fields)
        return BuiltQuery(sql, params)

    def delete(self, table: str, match_fields: Optional[Mapping[str, Any]] = None,
               return_fields: Sequence[str] = ()) -> BuiltQuery:
        """Generate DELETE query. No match fields means every row is deleted."""
        sql = f'DELETE FROM {table}'
        params: List[Any] = []
        if match_fields:
            where, params = self._conditions(match_fields)
            sql += f' WHERE {where}'
        sql += self._returning(return_fields)
        return BuiltQuery(sql, params)

    def build(self, operation: str, table: str, fields: Optional[Mapping[str, Any]] = None,
              match_fields: Optional[Mapping[str, Any]] = None, return_fields: Optional[Sequence[str]] = None,
              conflict_action: str = '') -> BuiltQuery:
        """Dispatch to the builder for ``operation``."""
        if operation not in OPERATIONS:
            raise InvalidOperation(f'Invalid operation type: {operation!r}')
        fields = fields or {}
        match_fields = match_fields or {}
        return_fields = return_fields or []
        if operation == 'insert':
            query = self.insert(table, fields, return_fields, conflict_action)
        elif operation == 'select':
            query = self.select(table, return_fields, match_fields)
        elif operation == 'update':
            query = self.update(table, fields, match_fields, return_fields)
        else:
            query = self.delete(table, match_fields, return_fields)
        logger.debug(f'Built {operation}: {query.sql}')
        return query


def build_query(operation: str, table: str, fields: Optional[Mapping[str, Any]] = None,
                match_fields: Optional[Mapping[str, Any]] = None, return_fields: Optional[Sequence[str]] = None,
                conflict_action: str = '') -> BuiltQuery:
    """Build ``(sql, params)`` for one CRUD operation."""
    return SQLBuilder().build(operation, table, fields, match_fields, return_fields, conflict_action)
