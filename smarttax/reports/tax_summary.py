"""Tax summary report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from smarttax.models.reports import TaxSummary
from smarttax.models.taxpayer import Taxpayer

TEMPLATE_DIR = Path(__file__).parent / "templates"


class TaxSummaryGenerator:
    """Generates a human-readable tax summary report."""

    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)))

    def render(self, taxpayer: Taxpayer, summary: TaxSummary, standard_deduction: int) -> str:
        """Render tax summary report."""
        template = self.env.get_template("tax_summary.txt")
        return template.render(
            taxpayer=taxpayer,
            summary=summary,
            standard_deduction=standard_deduction,
        )
