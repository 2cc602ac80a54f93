"""Optimization strategy report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from smarttax.models.reports import StrategyResult

TEMPLATE_DIR = Path(__file__).parent / "templates"

COMPLEXITY_LABELS = {1: "Low", 2: "Moderate", 3: "High"}


class StrategyReportGenerator:
    """Generates the optimization strategy report."""

    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)))
        self.env.filters["complexity"] = lambda level: COMPLEXITY_LABELS.get(level, str(level))

    def render(self, strategies: list[StrategyResult], warnings: list[str] | None = None) -> str:
        """Render strategy report."""
        template = self.env.get_template("strategy_report.txt")
        return template.render(
            strategies=strategies,
            total_savings=sum(s.potential_savings for s in strategies),
            warnings=warnings or [],
        )
