"""Jurisdiction comparison report generator."""

from decimal import Decimal
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from hometax.models.outcomes import ComparisonTable, PhaseoutYear, RetirementProjection

TEMPLATE_DIR = Path(__file__).parent / "templates"


def money(value: Decimal | None) -> str:
    if value is None:
        return "-"
    if value < 0:
        return f"-${-value:,.2f}"
    return f"${value:,.2f}"


def signed_money(value: Decimal) -> str:
    if value > 0:
        return f"+{money(value)}"
    return money(value)


def percent(value: Decimal) -> str:
    return f"{value:.2f}%"


class ComparisonReportGenerator:
    """Generates a plain-text side-by-side comparison of jurisdictions."""

    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)))
        self.env.filters["money"] = money
        self.env.filters["signed_money"] = signed_money
        self.env.filters["percent"] = percent

    def render(
        self,
        table: ComparisonTable,
        phaseouts: dict[str, list[PhaseoutYear]] | None = None,
        projections: list[RetirementProjection] | None = None,
        tax_year: int | None = None,
    ) -> str:
        """Render the comparison report.

        Phase-out and retirement sections appear only when supplied.
        """
        template = self.env.get_template("comparison.txt")
        return template.render(
            table=table,
            phaseouts=phaseouts or {},
            projections=projections or [],
            tax_year=tax_year,
        )
