"""Shared test fixtures for SmartTax Optimizer."""

import pytest

from smarttax.config import EngineConfig
from smarttax.db.migrations import migrate
from smarttax.db.repository import TaxRepository
from smarttax.db.schema import create_schema
from smarttax.models.enums import FilingStatus
from smarttax.optimizer import TaxOptimizer

OWNER = "admin"


@pytest.fixture
def db_conn(tmp_path):
    db_path = tmp_path / "test.db"
    conn = create_schema(db_path)
    migrate(conn)
    yield conn
    conn.close()


@pytest.fixture
def repo(db_conn):
    return TaxRepository(db_conn)


@pytest.fixture
def config(tmp_path) -> EngineConfig:
    return EngineConfig(db_path=tmp_path / "test.db", owner=OWNER)


@pytest.fixture
def optimizer(repo, config) -> TaxOptimizer:
    """Optimizer over a seeded store."""
    opt = TaxOptimizer(repo, config)
    opt.seed_brackets(OWNER).unwrap()
    return opt


@pytest.fixture
def john_doe(optimizer) -> int:
    """Single filer, age 35: $75,000 salary and a $5,000 above-the-line deduction."""
    optimizer.register_taxpayer(1, "John Doe", FilingStatus.SINGLE, 35, 2, 2024).unwrap()
    optimizer.add_income_source(1, 1, 1, 75000, 15000, True).unwrap()
    optimizer.add_deduction(1, 1, 1, 5000, True, False).unwrap()
    return 1
