from .executor import ErrorMode, Ok, Err, handle_error, execute_query
from .crud import create, read, update, delete
from .conn import SqlCon, QueryResult
from .pg import PgCon
from .config import DbSettings, get_settings

__all__ = [
    'ErrorMode', 'Ok', 'Err', 'handle_error', 'execute_query',
    'create', 'read', 'update', 'delete',
    'SqlCon', 'QueryResult', 'PgCon', 'DbSettings', 'get_settings'
]
