"""Typer CLI interface for SmartTax Optimizer."""

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from smarttax.config import EngineConfig
from smarttax.models.enums import FilingStatus, TopBracketPolicy
from smarttax.optimizer import TaxOptimizer
from smarttax.result import Err, Result

app = typer.Typer(
    name="smarttax",
    help="SmartTax Optimizer: income tax calculation and optimization strategies.",
)

STATUS_ALIASES = {
    "SINGLE": FilingStatus.SINGLE,
    "MFJ": FilingStatus.MARRIED_JOINT,
    "MFS": FilingStatus.MARRIED_SEPARATE,
    "HOH": FilingStatus.HEAD_OF_HOUSEHOLD,
}


def _parse_status(value: str) -> FilingStatus | int:
    """Map an alias, member name or code to a status.

    Numeric codes pass through unchecked so the operation reports its own error.
    """
    key = value.upper()
    if key in STATUS_ALIASES:
        return STATUS_ALIASES[key]
    if key.isdigit():
        code = int(key)
        return FilingStatus(code) if code in list(FilingStatus) else code
    try:
        return FilingStatus[key]
    except KeyError:
        valid = ", ".join(STATUS_ALIASES)
        typer.echo(f"Error: Invalid filing status '{value}'. Valid: {valid}", err=True)
        raise typer.Exit(1)


def _open(ctx: typer.Context) -> TaxOptimizer:
    config: EngineConfig = ctx.obj
    return TaxOptimizer.open(config=config)


def _check(result: Result) -> object:
    """Return the result's value, or print the error and exit 1."""
    if isinstance(result, Err):
        typer.echo(f"Error [{result.code}]: {result.error}", err=True)
        raise typer.Exit(1)
    return result.value


@app.callback()
def main(
    ctx: typer.Context,
    db: Path | None = typer.Option(
        None, "--db", help="Path to the SQLite database file (default: $SMARTTAX_DB or ~/.smarttax/smarttax.db)",
    ),
    top_bracket: TopBracketPolicy | None = typer.Option(
        None, "--top-bracket", case_sensitive=False,
        help="BOUNDED leaves income above the last bracket untaxed; OPEN taxes it at the top rate",
    ),
    fallback_status: str | None = typer.Option(
        None, "--bracket-fallback",
        help="Filing status whose brackets stand in for statuses with none (e.g. SINGLE)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """SmartTax Optimizer: income tax calculation and optimization strategies."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = EngineConfig.from_env(
            db_path=db,
            top_bracket_policy=top_bracket,
            bracket_fallback_status=_parse_status(fallback_status) if fallback_status else None,
        )
    except ValueError as exc:
        # Includes pydantic.ValidationError.
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def init(ctx: typer.Context) -> None:
    """Create the database if it does not exist."""
    optimizer = _open(ctx)
    optimizer.close()
    typer.echo(f"Database ready at {ctx.obj.db_path}")


@app.command()
def seed(
    ctx: typer.Context,
    caller: str = typer.Option(
        ..., "--caller", help="Identity of the caller; must match the configured owner",
    ),
) -> None:
    """Seed the bracket and standard deduction tables (owner only)."""
    optimizer = _open(ctx)
    try:
        _check(optimizer.seed_brackets(caller))
    finally:
        optimizer.close()
    typer.echo("Tax brackets and standard deductions seeded.")


@app.command()
def register(
    ctx: typer.Context,
    taxpayer_id: int = typer.Argument(..., help="Taxpayer ID"),
    name: str = typer.Option(..., "--name", help="Taxpayer name"),
    filing_status: str = typer.Option(
        "SINGLE", "--filing-status", "-s", help="Filing status: SINGLE, MFJ, MFS, HOH",
    ),
    age: int = typer.Option(..., "--age", help="Taxpayer age"),
    dependents: int = typer.Option(0, "--dependents", help="Number of dependents"),
    year: int = typer.Option(..., "--year", help="Tax year"),
) -> None:
    """Register a taxpayer."""
    status = _parse_status(filing_status)
    optimizer = _open(ctx)
    try:
        _check(optimizer.register_taxpayer(taxpayer_id, name, status, age, dependents, year))
    finally:
        optimizer.close()
    typer.echo(f"Registered taxpayer {taxpayer_id} ({name}).")


@app.command(name="add-income")
def add_income(
    ctx: typer.Context,
    taxpayer_id: int = typer.Argument(..., help="Taxpayer ID"),
    income_id: int = typer.Argument(..., help="Income source ID (per taxpayer)"),
    amount: int = typer.Option(..., "--amount", help="Amount in whole dollars"),
    income_type: int = typer.Option(1, "--type", help="Income type code (1 = salary)"),
    withheld: int = typer.Option(0, "--withheld", help="Tax withheld"),
    non_taxable: bool = typer.Option(False, "--non-taxable", help="Exclude from taxable income"),
) -> None:
    """Add or replace an income source."""
    optimizer = _open(ctx)
    try:
        _check(optimizer.add_income_source(
            taxpayer_id, income_id, income_type, amount, withheld, not non_taxable,
        ))
    finally:
        optimizer.close()
    typer.echo(f"Income source {income_id} saved for taxpayer {taxpayer_id}.")


@app.command(name="add-deduction")
def add_deduction(
    ctx: typer.Context,
    taxpayer_id: int = typer.Argument(..., help="Taxpayer ID"),
    deduction_id: int = typer.Argument(..., help="Deduction ID (per taxpayer)"),
    amount: int = typer.Option(..., "--amount", help="Amount in whole dollars"),
    deduction_type: int = typer.Option(1, "--type", help="Deduction type code"),
    above_line: bool = typer.Option(False, "--above-line", help="Above-the-line deduction"),
    itemized: bool = typer.Option(False, "--itemized", help="Itemized deduction"),
) -> None:
    """Add or replace a deduction."""
    optimizer = _open(ctx)
    try:
        _check(optimizer.add_deduction(
            taxpayer_id, deduction_id, deduction_type, amount, above_line, itemized,
        ))
    finally:
        optimizer.close()
    typer.echo(f"Deduction {deduction_id} saved for taxpayer {taxpayer_id}.")


@app.command()
def summary(
    ctx: typer.Context,
    taxpayer_id: int = typer.Argument(..., help="Taxpayer ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show AGI, tax liability and marginal cost for a taxpayer."""
    optimizer = _open(ctx)
    try:
        result = _check(optimizer.get_tax_summary(taxpayer_id))
    finally:
        optimizer.close()

    if json_output:
        typer.echo(json.dumps(result.model_dump(), indent=2))
        return
    typer.echo(f"AGI:            ${result.agi:>12,}")
    typer.echo(f"Tax Liability:  ${result.tax_liability:>12,}")
    typer.echo(f"Marginal/$1k:   ${result.marginal_rate:>12,}")


@app.command()
def strategies(
    ctx: typer.Context,
    taxpayer_id: int = typer.Argument(..., help="Taxpayer ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Generate optimization strategies for a taxpayer and list them."""
    optimizer = _open(ctx)
    try:
        _check(optimizer.generate_optimization_strategies(taxpayer_id))
        results = optimizer.get_optimization_strategies(taxpayer_id)
        warnings = list(optimizer.strategy_engine.warnings)
    finally:
        optimizer.close()

    if json_output:
        typer.echo(json.dumps([s.model_dump() for s in results], indent=2))
        return

    table = Table(title=f"Optimization Strategies: taxpayer {taxpayer_id}")
    table.add_column("#", justify="right")
    table.add_column("Strategy")
    table.add_column("Savings", justify="right")
    table.add_column("Complexity", justify="center")
    for s in results:
        table.add_row(str(s.id), s.name, f"${s.potential_savings:,}", str(s.complexity_level))
    console = Console()
    console.print(table)
    for w in warnings:
        typer.echo(f"Warning: {w}", err=True)


@app.command()
def report(
    ctx: typer.Context,
    taxpayer_id: int = typer.Argument(..., help="Taxpayer ID"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the report to a file"),
) -> None:
    """Render the tax summary and strategy report."""
    from smarttax.reports import StrategyReportGenerator, TaxSummaryGenerator

    optimizer = _open(ctx)
    try:
        summary_result = _check(optimizer.get_tax_summary(taxpayer_id))
        taxpayer = optimizer.get_taxpayer_info(taxpayer_id)
        deduction = optimizer.get_standard_deduction(taxpayer.filing_status, taxpayer.age)
        _check(optimizer.generate_optimization_strategies(taxpayer_id))
        results = optimizer.get_optimization_strategies(taxpayer_id)
        warnings = list(optimizer.strategy_engine.warnings)
    finally:
        optimizer.close()

    text = TaxSummaryGenerator().render(taxpayer, summary_result, deduction)
    text += "\n" + StrategyReportGenerator().render(results, warnings)
    if output is not None:
        output.write_text(text)
        typer.echo(f"Report written to {output}")
    else:
        typer.echo(text)


@app.command()
def brackets(
    ctx: typer.Context,
    filing_status: str = typer.Option(
        "SINGLE", "--filing-status", "-s", help="Filing status: SINGLE, MFJ, MFS, HOH",
    ),
) -> None:
    """List the stored brackets for a filing status."""
    status = _parse_status(filing_status)
    optimizer = _open(ctx)
    try:
        schedule = _check(optimizer.bracket_table.schedule(status))
    finally:
        optimizer.close()

    table = Table(title=f"Tax Brackets: {status.name}")
    table.add_column("Level", justify="right")
    table.add_column("From", justify="right")
    table.add_column("To", justify="right")
    table.add_column("Rate", justify="right")
    for b in schedule:
        table.add_row(str(b.level), f"${b.min_income:,}", f"${b.max_income:,}", f"{b.rate_bps / 100:.2f}%")
    Console().print(table)
