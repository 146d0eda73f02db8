"""Validated create/read/update/delete entry points.

Each call validates its arguments, builds one statement and runs it once on
``handle.query(sql, params)``. Validation errors and execution errors both go
through ``error_mode``: raised in ``"throw"`` mode, returned as ``Err`` in
``"return"`` mode (where success comes back as ``Ok``).

Table, column and return-field names are written into the SQL verbatim. Never
pass names taken from untrusted input; only values are bound.
"""

from collections.abc import Mapping
from typing import Any, Optional, Sequence, Union
import logging
from ..errors import (
    InvalidArgument, InvalidFieldShape, InvalidHandle, InvalidMatchFieldShape,
    InvalidReturnFieldShape, InvalidTableName, MissingReturnFields, QueryError
)
from ..sql_builder import build_query
from .executor import ErrorMode, execute_query, handle_error

logger = logging.getLogger(__name__)

Mode = Union[ErrorMode, str]


def _check_common(handle: Any, table: Any) -> Optional[QueryError]:
    if not callable(getattr(handle, 'query', None)):
        return InvalidHandle('Invalid database object provided')
    if not isinstance(table, str) or not table.strip():
        return InvalidTableName('Table name must be a valid string')
    return None


def _check_match(match_fields: Any) -> Optional[QueryError]:
    if not isinstance(match_fields, Mapping):
        return InvalidMatchFieldShape('Match fields must be a mapping of column to value')
    return None


def _check_returning(return_fields: Any) -> Optional[QueryError]:
    if not isinstance(return_fields, (list, tuple)):
        return InvalidReturnFieldShape('Return fields must be provided as a list')
    return None


def _run(handle: Any, mode: ErrorMode, operation: str, table: str, **parts: Any) -> Any:
    """Build then execute; builder errors follow the error mode too."""
    try:
        sql, params = build_query(operation, table, **parts)
    except QueryError as e:
        return handle_error(e, mode)
    return execute_query(handle, sql, params, mode)


def create(handle: Any, table: str, fields_to_insert: Optional[Mapping[str, Any]] = None,
           return_fields: Optional[Sequence[str]] = None, conflict_action: str = '',
           error_mode: Mode = ErrorMode.THROW) -> Any:
    """INSERT one row; an empty mapping inserts DEFAULT VALUES."""
    mode = ErrorMode(error_mode)
    fields_to_insert = {} if fields_to_insert is None else fields_to_insert
    return_fields = [] if return_fields is None else return_fields
    err = _check_common(handle, table)
    if err is None and not isinstance(fields_to_insert, Mapping):
        err = InvalidFieldShape('Insert data must be a mapping of column to value')
    err = err or _check_returning(return_fields)
    if err is None and not isinstance(conflict_action, str):
        err = InvalidArgument('Conflict action must be a string')
    if err is not None:
        return handle_error(err, mode)
    return _run(handle, mode, 'insert', table, fields=fields_to_insert,
                return_fields=return_fields, conflict_action=conflict_action)


def read(handle: Any, table: str, return_fields: Sequence[str],
         match_fields: Optional[Mapping[str, Any]] = None, error_mode: Mode = ErrorMode.THROW) -> Any:
    """SELECT ``return_fields``; pass ``['*']`` for every column."""
    mode = ErrorMode(error_mode)
    match_fields = {} if match_fields is None else match_fields
    err = _check_common(handle, table) or _check_returning(return_fields)
    if err is None and not return_fields:
        err = MissingReturnFields("You must provide return fields. For all fields, use ['*']")
    err = err or _check_match(match_fields)
    if err is not None:
        return handle_error(err, mode)
    return _run(handle, mode, 'select', table, match_fields=match_fields, return_fields=return_fields)


def update(handle: Any, table: str, fields_to_set: Mapping[str, Any],
           match_fields: Optional[Mapping[str, Any]] = None, return_fields: Optional[Sequence[str]] = None,
           error_mode: Mode = ErrorMode.THROW) -> Any:
    """UPDATE the rows matching ``match_fields``; every row when it is empty."""
    mode = ErrorMode(error_mode)
    match_fields = {} if match_fields is None else match_fields
    return_fields = [] if return_fields is None else return_fields
    err = _check_common(handle, table)
    if err is None and not isinstance(fields_to_set, Mapping):
        err = InvalidFieldShape('Set fields must be a mapping of column to value')
    if err is None and not fields_to_set:
        err = InvalidFieldShape('Set fields must not be empty')
    err = err or _check_match(match_fields) or _check_returning(return_fields)
    if err is not None:
        return handle_error(err, mode)
    return _run(handle, mode, 'update', table, fields=fields_to_set,
                match_fields=match_fields, return_fields=return_fields)


def delete(handle: Any, table: str, match_fields: Optional[Mapping[str, Any]] = None,
           return_fields: Optional[Sequence[str]] = None, error_mode: Mode = ErrorMode.THROW) -> Any:
    """DELETE the rows matching ``match_fields``.

    An empty ``match_fields`` deletes every row in the table.
    """
    mode = ErrorMode(error_mode)
    match_fields = {} if match_fields is None else match_fields
    return_fields = [] if return_fields is None else return_fields
    err = _check_common(handle, table) or _check_match(match_fields) or _check_returning(return_fields)
    if err is not None:
        return handle_error(err, mode)
    if not match_fields:
        logger.info(f'Deleting every row from {table}')
    return _run(handle, mode, 'delete', table, match_fields=match_fields, return_fields=return_fields)
