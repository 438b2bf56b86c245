"""Pytest configuration and fixtures."""

import sqlite3

import pytest


@pytest.fixture
def sqlite_db(tmp_path):
    """SQLite file with an empty ``users`` table and a two-row ``orders`` table."""
    db_path = tmp_path / "console.db"
    conn = sqlite3.connect(str(db_path))
    try:
        cur = conn.cursor()
        cur.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT)")
        cur.execute("CREATE TABLE orders (id INTEGER PRIMARY KEY, user_id INTEGER, amount REAL)")
        cur.execute("CREATE VIEW big_orders AS SELECT * FROM orders WHERE amount > 15")
        cur.execute("INSERT INTO orders(user_id, amount) VALUES (1, 10.0)")
        cur.execute("INSERT INTO orders(user_id, amount) VALUES (2, 20.0)")
        conn.commit()
    finally:
        conn.close()
    return db_path


@pytest.fixture
def sqlite_uri(sqlite_db):
    return f"sqlite:///{sqlite_db}"
