"""Query execution and error-mode handling."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Sequence, TypeVar, Union
import logging
from ..errors import ExecutionFailure, QueryError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ErrorMode(str, Enum):
    """How a failure reaches the caller: raised, or returned as ``Err``."""
    THROW = 'throw'
    RETURN = 'return'


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result in ``return`` mode."""
    value: T
    ok = True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed result in ``return`` mode."""
    error: QueryError
    ok = False

    def unwrap(self):
        raise self.error


Result = Union[Ok[Any], Err]


def handle_error(error: QueryError, error_mode: Union[ErrorMode, str]) -> Err:
    """Raise ``error`` in throw mode, otherwise hand it back as ``Err``."""
    if ErrorMode(error_mode) is ErrorMode.THROW:
        raise error
    return Err(error)


def execute_query(handle: Any, sql: str, params: Sequence[Any],
                  error_mode: Union[ErrorMode, str] = ErrorMode.THROW) -> Any:
    """Run ``sql`` once on ``handle.query``; no retry.

    Throw mode returns the handle's result unchanged and raises
    ``ExecutionFailure`` on error. Return mode wraps the outcome in ``Ok`` or
    ``Err``.
    """
    mode = ErrorMode(error_mode)
    logger.debug(f'SQL: {sql} | Params: {list(params)}')
    try:
        result = handle.query(sql, list(params))
    except Exception as e:
        logger.warning(f'Query failed: {e}')
        failure = ExecutionFailure(str(e))
        failure.__cause__ = e
        return handle_error(failure, mode)
    return Ok(result) if mode is ErrorMode.RETURN else result
