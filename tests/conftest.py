import pytest

from pgcrud import SqlCon


class RecordingHandle:
    """Handle that records every query and returns a canned result."""

    def __init__(self, result=None):
        self.result = [] if result is None else result
        self.calls = []

    def query(self, sql, params):
        self.calls.append((sql, params))
        return self.result


class FailingHandle:
    """Handle whose query always fails like a driver error."""

    def __init__(self, message='relation "missing" does not exist'):
        self.message = message
        self.calls = 0

    def query(self, sql, params):
        self.calls += 1
        raise RuntimeError(self.message)


@pytest.fixture()
def handle():
    return RecordingHandle(result=[{'id': 1}])


@pytest.fixture()
def failing_handle():
    return FailingHandle()


@pytest.fixture()
def sqlite_con(tmp_path):
    con = SqlCon(f"sqlite:///{tmp_path / 'crud_test.db'}")
    con.query(
        'CREATE TABLE users ('
        ' id INTEGER PRIMARY KEY AUTOINCREMENT,'
        " name TEXT NOT NULL DEFAULT 'anon' UNIQUE,"
        ' age INTEGER)'
    )
    yield con
    con.close()
