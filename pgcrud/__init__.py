"""CRUD helpers that build $n-parameterized SQL and run it on a database handle."""

from .sql_builder import SQLBuilder, BuiltQuery, build_query, OPERATIONS, adapt_sql
from .sqlexec import (
    ErrorMode, Ok, Err, handle_error, execute_query,
    create, read, update, delete,
    SqlCon, QueryResult, PgCon, DbSettings, get_settings
)
from .errors import (
    QueryError, InvalidArgument, InvalidHandle, InvalidTableName,
    InvalidFieldShape, InvalidReturnFieldShape, InvalidMatchFieldShape,
    MissingReturnFields, InvalidOperation, ExecutionFailure
)

__all__ = [
    'SQLBuilder', 'BuiltQuery', 'build_query', 'OPERATIONS', 'adapt_sql',
    'ErrorMode', 'Ok', 'Err', 'handle_error', 'execute_query',
    'create', 'read', 'update', 'delete',
    'SqlCon', 'QueryResult', 'PgCon', 'DbSettings', 'get_settings',
    'QueryError', 'InvalidArgument', 'InvalidHandle', 'InvalidTableName',
    'InvalidFieldShape', 'InvalidReturnFieldShape', 'InvalidMatchFieldShape',
    'MissingReturnFields', 'InvalidOperation', 'ExecutionFailure'
]
