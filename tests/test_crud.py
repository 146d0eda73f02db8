"""
Unit tests for the validated create/read/update/delete entry points.
"""

import pytest

from pgcrud import (
    Err, ExecutionFailure, InvalidArgument, InvalidFieldShape, InvalidHandle, InvalidMatchFieldShape,
    InvalidReturnFieldShape, InvalidTableName, MissingReturnFields, Ok, create, delete, read, update
)


class TestCreate:
    """create() builds an INSERT and runs it once."""

    def test_create(self, handle):
        result = create(handle, 'users', {'name': 'ann', 'age': 31}, ['id'])
        assert result == [{'id': 1}]
        assert handle.calls == [('INSERT INTO users (name, age) VALUES ($1, $2) RETURNING id', ['ann', 31])]

    def test_create_defaults(self, handle):
        create(handle, 'users')
        assert handle.calls == [('INSERT INTO users DEFAULT VALUES', [])]

    def test_create_conflict_action(self, handle):
        create(handle, 'users', {'name': 'ann'}, conflict_action='ON CONFLICT (name) DO NOTHING')
        assert handle.calls[0][0] == 'INSERT INTO users (name) VALUES ($1) ON CONFLICT (name) DO NOTHING'

    def test_fields_must_be_mapping(self, handle):
        with pytest.raises(InvalidFieldShape):
            create(handle, 'users', [('name', 'ann')])
        assert handle.calls == []

    def test_conflict_action_must_be_string(self, handle):
        with pytest.raises(InvalidArgument):
            create(handle, 'users', {'name': 'ann'}, conflict_action=None)

    def test_return_mode_ok(self, handle):
        result = create(handle, 'users', {'name': 'ann'}, error_mode='return')
        assert isinstance(result, Ok)
        assert result.value == [{'id': 1}]


class TestRead:
    """read() requires explicit return fields."""

    def test_read(self, handle):
        read(handle, 'users', ['id', 'name'], {'age': 31})
        assert handle.calls == [('SELECT id, name FROM users WHERE age=$1', [31])]

    def test_read_all(self, handle):
        read(handle, 'users', ['*'])
        assert handle.calls == [('SELECT * FROM users', [])]

    def test_missing_return_fields(self, handle):
        with pytest.raises(MissingReturnFields):
            read(handle, 'users', [])
        assert handle.calls == []

    def test_missing_return_fields_returned(self, handle):
        result = read(handle, 'users', [], error_mode='return')
        assert isinstance(result, Err)
        assert isinstance(result.error, MissingReturnFields)

    def test_return_fields_must_be_list(self, handle):
        with pytest.raises(InvalidReturnFieldShape):
            read(handle, 'users', 'id, name')

    def test_match_fields_must_be_mapping(self, handle):
        with pytest.raises(InvalidMatchFieldShape):
            read(handle, 'users', ['*'], [('id', 1)])


class TestUpdate:
    """update() numbers WHERE placeholders after SET."""

    def test_update(self, handle):
        update(handle, 't', {'a': 1}, {'b': 2}, ['a'])
        assert handle.calls == [('UPDATE t SET a=$1 WHERE b=$2 RETURNING a', [1, 2])]

    def test_set_fields_required(self, handle):
        with pytest.raises(InvalidFieldShape):
            update(handle, 't', {}, {'b': 2})
        assert handle.calls == []

    def test_set_fields_must_be_mapping(self, handle):
        with pytest.raises(InvalidFieldShape):
            update(handle, 't', ['a'], {'b': 2})

    def test_match_fields_must_be_mapping(self, handle):
        result = update(handle, 't', {'a': 1}, ['b'], error_mode='return')
        assert isinstance(result.error, InvalidMatchFieldShape)

    def test_return_fields_must_be_list(self, handle):
        with pytest.raises(InvalidReturnFieldShape):
            update(handle, 't', {'a': 1}, return_fields='a')


class TestDelete:
    """delete() with an empty match map deletes every row."""

    def test_delete_all(self, handle):
        delete(handle, 't', {})
        assert handle.calls == [('DELETE FROM t', [])]

    def test_delete_where_returning(self, handle):
        delete(handle, 't', {'id': 4}, ['id'])
        assert handle.calls == [('DELETE FROM t WHERE id=$1 RETURNING id', [4])]

    def test_match_fields_must_be_mapping(self, handle):
        with pytest.raises(InvalidMatchFieldShape):
            delete(handle, 't', [1, 2])


class TestCommonValidation:
    """Handle and table checks shared by every entry point."""

    @pytest.mark.parametrize('bad_handle', [None, 'postgres://', {}, object()])
    def test_invalid_handle(self, bad_handle):
        with pytest.raises(InvalidHandle):
            read(bad_handle, 'users', ['*'])

    @pytest.mark.parametrize('table', ['', '   ', None, 42])
    def test_invalid_table(self, handle, table):
        with pytest.raises(InvalidTableName):
            delete(handle, table)
        assert handle.calls == []

    def test_validation_and_execution_errors_look_alike(self, handle, failing_handle):
        """Both kinds come back as Err in return mode."""
        invalid = create(handle, '', {'a': 1}, error_mode='return')
        failed = create(failing_handle, 't', {'a': 1}, error_mode='return')
        assert isinstance(invalid, Err)
        assert isinstance(failed, Err)
        assert isinstance(failed.error, ExecutionFailure)

    def test_execution_failure_raises(self, failing_handle):
        with pytest.raises(ExecutionFailure):
            update(failing_handle, 't', {'a': 1}, {'b': 2})

    def test_execution_failure_never_raises_in_return_mode(self, failing_handle):
        for call in (
            lambda: create(failing_handle, 't', {'a': 1}, error_mode='return'),
            lambda: read(failing_handle, 't', ['*'], error_mode='return'),
            lambda: update(failing_handle, 't', {'a': 1}, error_mode='return'),
            lambda: delete(failing_handle, 't', error_mode='return'),
        ):
            assert call().ok is False

    def test_unknown_error_mode(self, handle):
        with pytest.raises(ValueError):
            read(handle, 'users', ['*'], error_mode='silent')


class TestShapeChecksPerEntryPoint:
    """Handle and return-field checks apply to every entry point."""

    @pytest.mark.parametrize('call', [
        lambda h: create(h, 'users', {'name': 'ann'}),
        lambda h: read(h, 'users', ['*']),
        lambda h: update(h, 'users', {'name': 'ann'}, {'id': 1}),
        lambda h: delete(h, 'users', {'id': 1}),
    ], ids=['create', 'read', 'update', 'delete'])
    def test_invalid_handle(self, call):
        with pytest.raises(InvalidHandle):
            call(object())

    @pytest.mark.parametrize('call', [
        lambda h: create(h, 'users', {'name': 'ann'}, 'id'),
        lambda h: update(h, 'users', {'name': 'ann'}, {'id': 1}, {'id': True}),
        lambda h: delete(h, 'users', {'id': 1}, 'id'),
    ], ids=['create', 'update', 'delete'])
    def test_invalid_return_fields(self, handle, call):
        with pytest.raises(InvalidReturnFieldShape):
            call(handle)
        assert handle.calls == []

    def test_invalid_handle_returned(self):
        result = delete(None, 'users', error_mode='return')
        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidHandle)
