"""Tests for schema creation and migrations."""

import sqlite3

import pytest

from smarttax.db.migrations import get_current_version, migrate
from smarttax.db.schema import SCHEMA_VERSION, create_schema
from smarttax.optimizer import TaxOptimizer


@pytest.fixture
def fresh_conn(tmp_path):
    conn = create_schema(tmp_path / "fresh.db")
    yield conn
    conn.close()


def test_new_schema_is_unversioned(fresh_conn):
    assert get_current_version(fresh_conn) == 0


def test_migrate_records_version(fresh_conn):
    assert migrate(fresh_conn) == SCHEMA_VERSION
    assert get_current_version(fresh_conn) == SCHEMA_VERSION
    rows = fresh_conn.execute("SELECT version FROM schema_version").fetchall()
    assert rows == [(SCHEMA_VERSION,)]


def test_migrate_is_noop_when_current(db_conn):
    assert migrate(db_conn) == SCHEMA_VERSION
    rows = db_conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0]
    assert rows == 1


def test_open_migrates_store(tmp_path):
    opt = TaxOptimizer.open(tmp_path / "opened.db")
    try:
        assert get_current_version(opt.repo.conn) == SCHEMA_VERSION
    finally:
        opt.close()


def test_version_without_table():
    conn = sqlite3.connect(":memory:")
    assert get_current_version(conn) == 0
    conn.close()


def test_schema_is_reentrant(tmp_path):
    path = tmp_path / "twice.db"
    create_schema(path).close()
    conn = create_schema(path)
    tables = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert {"tax_brackets", "taxpayers", "income_sources", "deductions",
            "optimization_strategies", "standard_deductions", "audit_log"} <= tables
    conn.close()


def test_foreign_keys_enforced(db_conn):
    with pytest.raises(sqlite3.IntegrityError):
        db_conn.execute(
            "INSERT INTO income_sources (taxpayer_id, income_id, income_type, amount) VALUES (99, 1, 1, 10)"
        )
