"""SQLite database schema definition."""

import sqlite3
from pathlib import Path

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS tax_brackets (
    filing_status INTEGER NOT NULL,
    level INTEGER NOT NULL,
    min_income INTEGER NOT NULL,
    max_income INTEGER NOT NULL,
    rate_bps INTEGER NOT NULL,
    PRIMARY KEY (filing_status, level)
);

CREATE TABLE IF NOT EXISTS standard_deductions (
    filing_status INTEGER NOT NULL,
    age_band TEXT NOT NULL,
    amount INTEGER NOT NULL,
    PRIMARY KEY (filing_status, age_band)
);

CREATE TABLE IF NOT EXISTS taxpayers (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    filing_status INTEGER NOT NULL,
    age INTEGER NOT NULL,
    dependents INTEGER NOT NULL DEFAULT 0,
    tax_year INTEGER NOT NULL,
    registered_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS income_sources (
    taxpayer_id INTEGER NOT NULL REFERENCES taxpayers(id),
    income_id INTEGER NOT NULL,
    income_type INTEGER NOT NULL,
    amount INTEGER NOT NULL,
    tax_withheld INTEGER NOT NULL DEFAULT 0,
    is_taxable INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL DEFAULT (datetime('now')),
    PRIMARY KEY (taxpayer_id, income_id)
);

CREATE TABLE IF NOT EXISTS deductions (
    taxpayer_id INTEGER NOT NULL REFERENCES taxpayers(id),
    deduction_id INTEGER NOT NULL,
    deduction_type INTEGER NOT NULL,
    amount INTEGER NOT NULL,
    is_above_line INTEGER NOT NULL DEFAULT 0,
    is_itemized INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL DEFAULT (datetime('now')),
    PRIMARY KEY (taxpayer_id, deduction_id)
);

CREATE TABLE IF NOT EXISTS optimization_strategies (
    id INTEGER PRIMARY KEY,
    taxpayer_id INTEGER NOT NULL REFERENCES taxpayers(id),
    name TEXT NOT NULL,
    description TEXT NOT NULL,
    potential_savings INTEGER NOT NULL,
    complexity_level INTEGER NOT NULL,
    is_legal INTEGER NOT NULL DEFAULT 1,
    generated_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS audit_log (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp TEXT NOT NULL DEFAULT (datetime('now')),
    engine TEXT NOT NULL,
    operation TEXT NOT NULL,
    inputs TEXT NOT NULL,
    output TEXT NOT NULL,
    notes TEXT
);
"""


def create_schema(db_path: Path | str) -> sqlite3.Connection:
    """Create the tables if missing. Returns the connection.

    The schema_version row is written by ``migrations.migrate``.
    """
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    conn.executescript(SCHEMA_SQL)
    conn.commit()
    return conn
