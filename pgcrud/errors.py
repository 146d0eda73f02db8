"""Error types raised or returned by the CRUD helpers."""


class QueryError(Exception):
    """Base class for every error this package reports."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(QueryError, ValueError):
    """An argument has the wrong shape or an unusable value."""


class InvalidHandle(InvalidArgument):
    """The database handle has no callable ``query``."""


class InvalidTableName(InvalidArgument):
    """Table name is not a non-empty string."""


class InvalidFieldShape(InvalidArgument):
    """Insert/set fields are not a key-value mapping."""


class InvalidReturnFieldShape(InvalidArgument):
    """Return fields are not a list or tuple."""


class InvalidMatchFieldShape(InvalidArgument):
    """Match fields are not a key-value mapping."""


class MissingReturnFields(InvalidArgument):
    """A SELECT was requested without any return fields."""


class InvalidOperation(QueryError, ValueError):
    """Operation tag is not one of insert, select, update, delete."""


class ExecutionFailure(QueryError):
    """The database handle failed to run the statement."""
