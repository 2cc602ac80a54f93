"""Database layer for SmartTax Optimizer."""

from smarttax.db.repository import TaxRepository
from smarttax.db.schema import create_schema

__all__ = ["TaxRepository", "create_schema"]
