"""Data access layer for SmartTax Optimizer."""

import json
import sqlite3

from smarttax.models.brackets import StandardDeductionEntry, TaxBracket
from smarttax.models.enums import FilingStatus
from smarttax.models.reports import AuditEntry, StrategyResult
from smarttax.models.taxpayer import Deduction, IncomeSource, Taxpayer


class TaxRepository:
    """CRUD operations for tax entities.

    Every write is an upsert keyed by the record's identity, so repeating a
    write replaces the earlier row instead of adding a new one.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def _rows(self, cursor: sqlite3.Cursor) -> list[dict]:
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]

    # --- Tax brackets ---

    def save_bracket(self, bracket: TaxBracket) -> None:
        """Insert or update a bracket keyed by (filing status, level)."""
        self.conn.execute(
            """INSERT OR REPLACE INTO tax_brackets
               (filing_status, level, min_income, max_income, rate_bps)
               VALUES (?, ?, ?, ?, ?)""",
            (
                int(bracket.filing_status),
                bracket.level,
                bracket.min_income,
                bracket.max_income,
                bracket.rate_bps,
            ),
        )
        self.conn.commit()

    def get_bracket(self, filing_status: FilingStatus, level: int) -> dict | None:
        cursor = self.conn.execute(
            "SELECT * FROM tax_brackets WHERE filing_status = ? AND level = ?",
            (int(filing_status), level),
        )
        rows = self._rows(cursor)
        return rows[0] if rows else None

    def get_brackets(self, filing_status: FilingStatus | None = None) -> list[dict]:
        """Retrieve brackets in level order, optionally for one filing status."""
        if filing_status is not None:
            cursor = self.conn.execute(
                "SELECT * FROM tax_brackets WHERE filing_status = ? ORDER BY level",
                (int(filing_status),),
            )
        else:
            cursor = self.conn.execute(
                "SELECT * FROM tax_brackets ORDER BY filing_status, level"
            )
        return self._rows(cursor)

    # --- Standard deductions ---

    def save_standard_deduction(self, entry: StandardDeductionEntry) -> None:
        self.conn.execute(
            """INSERT OR REPLACE INTO standard_deductions
               (filing_status, age_band, amount)
               VALUES (?, ?, ?)""",
            (int(entry.filing_status), entry.age_band.value, entry.amount),
        )
        self.conn.commit()

    def get_standard_deductions(self) -> list[dict]:
        cursor = self.conn.execute(
            "SELECT * FROM standard_deductions ORDER BY filing_status, age_band"
        )
        return self._rows(cursor)

    # --- Taxpayers ---

    def save_taxpayer(self, taxpayer: Taxpayer) -> None:
        """Insert a taxpayer, or overwrite the registration fields of an existing one."""
        self.conn.execute(
            """INSERT INTO taxpayers
               (id, name, filing_status, age, dependents, tax_year)
               VALUES (?, ?, ?, ?, ?, ?)
               ON CONFLICT(id) DO UPDATE SET
                   name = excluded.name,
                   filing_status = excluded.filing_status,
                   age = excluded.age,
                   dependents = excluded.dependents,
                   tax_year = excluded.tax_year""",
            (
                taxpayer.id,
                taxpayer.name,
                int(taxpayer.filing_status),
                taxpayer.age,
                taxpayer.dependents,
                taxpayer.tax_year,
            ),
        )
        self.conn.commit()

    def get_taxpayer(self, taxpayer_id: int) -> dict | None:
        cursor = self.conn.execute(
            "SELECT * FROM taxpayers WHERE id = ?", (taxpayer_id,)
        )
        rows = self._rows(cursor)
        return rows[0] if rows else None

    def taxpayer_exists(self, taxpayer_id: int) -> bool:
        cursor = self.conn.execute(
            "SELECT 1 FROM taxpayers WHERE id = ?", (taxpayer_id,)
        )
        return cursor.fetchone() is not None

    # --- Income sources ---

    def save_income_source(self, income: IncomeSource) -> None:
        self.conn.execute(
            """INSERT OR REPLACE INTO income_sources
               (taxpayer_id, income_id, income_type, amount, tax_withheld, is_taxable)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (
                income.taxpayer_id,
                income.income_id,
                income.income_type,
                income.amount,
                income.tax_withheld,
                int(income.is_taxable),
            ),
        )
        self.conn.commit()

    def get_income_sources(self, taxpayer_id: int) -> list[dict]:
        cursor = self.conn.execute(
            "SELECT * FROM income_sources WHERE taxpayer_id = ? ORDER BY income_id",
            (taxpayer_id,),
        )
        rows = self._rows(cursor)
        for row in rows:
            row["is_taxable"] = bool(row["is_taxable"])
        return rows

    # --- Deductions ---

    def save_deduction(self, deduction: Deduction) -> None:
        self.conn.execute(
            """INSERT OR REPLACE INTO deductions
               (taxpayer_id, deduction_id, deduction_type, amount,
                is_above_line, is_itemized)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (
                deduction.taxpayer_id,
                deduction.deduction_id,
                deduction.deduction_type,
                deduction.amount,
                int(deduction.is_above_line),
                int(deduction.is_itemized),
            ),
        )
        self.conn.commit()

    def get_deductions(self, taxpayer_id: int) -> list[dict]:
        cursor = self.conn.execute(
            "SELECT * FROM deductions WHERE taxpayer_id = ? ORDER BY deduction_id",
            (taxpayer_id,),
        )
        rows = self._rows(cursor)
        for row in rows:
            row["is_above_line"] = bool(row["is_above_line"])
            row["is_itemized"] = bool(row["is_itemized"])
        return rows

    # --- Optimization strategies ---

    def save_strategy(self, strategy: StrategyResult) -> None:
        """Insert or overwrite the strategy with the same id."""
        self.conn.execute(
            """INSERT OR REPLACE INTO optimization_strategies
               (id, taxpayer_id, name, description, potential_savings,
                complexity_level, is_legal)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (
                strategy.id,
                strategy.taxpayer_id,
                strategy.name,
                strategy.description,
                strategy.potential_savings,
                strategy.complexity_level,
                int(strategy.is_legal),
            ),
        )
        self.conn.commit()

    def get_strategy(self, strategy_id: int) -> dict | None:
        cursor = self.conn.execute(
            "SELECT * FROM optimization_strategies WHERE id = ?", (strategy_id,)
        )
        rows = self._rows(cursor)
        if not rows:
            return None
        rows[0]["is_legal"] = bool(rows[0]["is_legal"])
        return rows[0]

    def get_strategies(self, taxpayer_id: int | None = None) -> list[dict]:
        if taxpayer_id is not None:
            cursor = self.conn.execute(
                "SELECT * FROM optimization_strategies WHERE taxpayer_id = ? ORDER BY id",
                (taxpayer_id,),
            )
        else:
            cursor = self.conn.execute(
                "SELECT * FROM optimization_strategies ORDER BY id"
            )
        rows = self._rows(cursor)
        for row in rows:
            row["is_legal"] = bool(row["is_legal"])
        return rows

    # --- Audit log ---

    def log_audit(self, entry: AuditEntry) -> None:
        self.conn.execute(
            """INSERT INTO audit_log (timestamp, engine, operation, inputs, output, notes)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (
                entry.timestamp.isoformat(),
                entry.engine,
                entry.operation,
                json.dumps(entry.inputs, default=str),
                json.dumps(entry.output, default=str),
                entry.notes,
            ),
        )
        self.conn.commit()

    def get_audit_log(self, engine: str | None = None) -> list[dict]:
        if engine:
            cursor = self.conn.execute(
                "SELECT * FROM audit_log WHERE engine = ? ORDER BY id", (engine,)
            )
        else:
            cursor = self.conn.execute("SELECT * FROM audit_log ORDER BY id")
        rows = self._rows(cursor)
        for row in rows:
            row["inputs"] = json.loads(row["inputs"])
            row["output"] = json.loads(row["output"])
        return rows
