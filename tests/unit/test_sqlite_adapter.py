import pytest

from adapters.errors import DatabaseConnectionError, QueryError, ValidationError
from adapters.results import QueryResult, TableColumn
from adapters.sqlite import SQLiteAdapter


def test_select_on_empty_table_returns_columns_and_no_rows(sqlite_uri):
    adapter = SQLiteAdapter(sqlite_uri)
    try:
        result = adapter.query("SELECT id, name FROM users")
    finally:
        adapter.disconnect()
    assert result == QueryResult(columns=["id", "name"], rows=[])


def test_select_rows_are_keyed_by_columns(sqlite_uri):
    with SQLiteAdapter(sqlite_uri) as adapter:
        result = adapter.query("SELECT user_id, amount FROM orders ORDER BY amount DESC")
    assert result.columns == ["user_id", "amount"]
    assert result.rows == [{"user_id": 2, "amount": 20.0}, {"user_id": 1, "amount": 10.0}]
    assert all(set(row) == set(result.columns) for row in result.rows)


def test_delete_reports_affected_rows(sqlite_uri):
    with SQLiteAdapter(sqlite_uri) as adapter:
        result = adapter.query("DELETE FROM orders WHERE user_id = 1")
        remaining = adapter.query("SELECT COUNT(*) AS n FROM orders")
    assert result.to_dict() == {"columns": ["Message"], "rows": [{"Message": "Success. Affected Rows: 1"}]}
    assert remaining.rows == [{"n": 1}]


def test_ddl_reports_zero_affected_rows(sqlite_uri):
    with SQLiteAdapter(sqlite_uri) as adapter:
        result = adapter.query("CREATE TABLE audit (id INTEGER)")
    assert result.rows == [{"Message": "Success. Affected Rows: 0"}]


def test_mutation_is_persisted_without_explicit_commit(sqlite_uri):
    with SQLiteAdapter(sqlite_uri) as adapter:
        adapter.query("INSERT INTO users(id, name) VALUES (7, 'ada')")
    with SQLiteAdapter(sqlite_uri) as adapter:
        result = adapter.query("SELECT name FROM users WHERE id = 7")
    assert result.rows == [{"name": "ada"}]


def test_query_lazily_connects(sqlite_uri):
    lazy = SQLiteAdapter(sqlite_uri)
    eager = SQLiteAdapter(sqlite_uri)
    eager.connect()
    try:
        assert not lazy.is_connected
        lazy_result = lazy.query("SELECT id, amount FROM orders ORDER BY id")
        assert lazy.is_connected
        assert lazy_result == eager.query("SELECT id, amount FROM orders ORDER BY id")
    finally:
        lazy.disconnect()
        eager.disconnect()


def test_connect_twice_keeps_the_same_handle(sqlite_uri):
    adapter = SQLiteAdapter(sqlite_uri)
    adapter.connect()
    handle = adapter._conn
    adapter.connect()
    assert adapter._conn is handle
    adapter.disconnect()


def test_disconnect_is_idempotent(sqlite_uri):
    adapter = SQLiteAdapter(sqlite_uri)
    adapter.disconnect()
    adapter.connect()
    adapter.disconnect()
    adapter.disconnect()
    assert not adapter.is_connected


def test_query_error_keeps_driver_message(sqlite_uri):
    with SQLiteAdapter(sqlite_uri) as adapter:
        with pytest.raises(QueryError, match="no such table: missing"):
            adapter.query("SELECT * FROM missing")


def test_missing_database_file_is_a_connection_error(tmp_path):
    adapter = SQLiteAdapter(f"sqlite:///{tmp_path / 'absent.db'}")
    with pytest.raises(DatabaseConnectionError, match="does not exist"):
        adapter.connect()
    assert not adapter.is_connected


def test_list_tables_returns_base_tables_only(sqlite_uri):
    with SQLiteAdapter(sqlite_uri) as adapter:
        tables = adapter.list_tables()
    assert tables == ["users", "orders"]


def test_list_columns_in_declaration_order(sqlite_uri):
    with SQLiteAdapter(sqlite_uri) as adapter:
        columns = adapter.list_columns("orders")
    assert columns == [
        TableColumn(field="id", type="INTEGER"),
        TableColumn(field="user_id", type="INTEGER"),
        TableColumn(field="amount", type="REAL"),
    ]


def test_list_columns_rejects_bad_name_before_connecting(sqlite_uri):
    adapter = SQLiteAdapter(sqlite_uri)
    with pytest.raises(ValidationError):
        adapter.list_columns('orders"; DROP TABLE users; --')
    assert not adapter.is_connected


def test_memory_database_needs_no_file():
    with SQLiteAdapter("sqlite://:memory:") as adapter:
        adapter.query("CREATE TABLE t (x INTEGER)")
        assert adapter.query("INSERT INTO t VALUES (1), (2)").rows == [{"Message": "Success. Affected Rows: 2"}]
        assert adapter.list_tables() == ["t"]
