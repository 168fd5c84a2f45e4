"""Typer CLI interface for HomeTax."""

import logging
from decimal import Decimal
from pathlib import Path
from typing import Optional

import typer

DEFAULT_DB = Path.home() / ".hometax" / "scenarios.db"

app = typer.Typer(
    name="hometax",
    help="HomeTax: compare take-home pay, housing cost and retirement timing across states.",
)
scenario_app = typer.Typer(help="Save, list, show and delete named scenarios.")
app.add_typer(scenario_app, name="scenario")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine detail to stderr"),
) -> None:
    """HomeTax: compare take-home pay, housing cost and retirement timing across states."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Shared option definitions
# ---------------------------------------------------------------------------

ScenarioFileOption = typer.Option(
    None,
    "--scenario-file",
    "-f",
    help="Scenario JSON file (snake_case or legacy camelCase keys)",
)
NameOption = typer.Option(None, "--name", "-n", help="Load a saved scenario by name")
DbOption = typer.Option(DEFAULT_DB, "--db", help="Path to the SQLite scenario database")
TablesOption = typer.Option(None, "--tables", help="Tax table JSON file replacing the built-in tables")
StateOption = typer.Option(
    None,
    "--state",
    "-s",
    help="Jurisdiction to compare (repeatable); overrides the scenario selection",
)
BaselineOption = typer.Option(None, "--baseline", "-b", help="Baseline jurisdiction for deltas")


def _load_tables(tables: Optional[Path]):
    from hometax.engines.brackets import default_tax_tables
    from hometax.exceptions import ConfigurationError
    from hometax.models.jurisdiction import load_tax_tables

    if tables is None:
        return default_tax_tables()
    try:
        return load_tax_tables(tables)
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)


def _load_blob(scenario_file: Optional[Path], name: Optional[str], db: Path):
    """Resolve the scenario from a file, a saved name, or the defaults."""
    from pydantic import ValidationError

    from hometax.models.scenario import ScenarioBlob

    if scenario_file is not None and name is not None:
        typer.echo("Error: Use either --scenario-file or --name, not both.", err=True)
        raise typer.Exit(1)

    if scenario_file is not None:
        if not scenario_file.exists():
            typer.echo(f"Error: Scenario file not found: {scenario_file}", err=True)
            raise typer.Exit(1)
        try:
            return ScenarioBlob.model_validate_json(scenario_file.read_text())
        except ValidationError as exc:
            typer.echo(f"Error: Invalid scenario file {scenario_file}: {exc}", err=True)
            raise typer.Exit(1)

    if name is not None:
        from hometax.db.repository import ScenarioRepository
        from hometax.db.schema import create_schema
        from hometax.exceptions import ScenarioNotFoundError

        if not db.exists():
            typer.echo("Error: No scenario database found. Save one with `hometax scenario save`.", err=True)
            raise typer.Exit(1)
        conn = create_schema(db)
        try:
            return ScenarioRepository(conn).get(name)
        except ScenarioNotFoundError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1)
        finally:
            conn.close()

    return ScenarioBlob()


def _run_comparison(blob, tables, states: Optional[list[str]], baseline: Optional[str]):
    from hometax.engines.comparator import MultiJurisdictionComparator
    from hometax.exceptions import JurisdictionNotFoundError

    selection = states or blob.selected_jurisdictions
    try:
        return MultiJurisdictionComparator(tables).compare(
            blob.household(), selection, blob.housing, baseline=baseline
        )
    except JurisdictionNotFoundError as exc:
        known = ", ".join(tables.jurisdictions)
        typer.echo(f"Error: {exc}. Known jurisdictions: {known}", err=True)
        raise typer.Exit(1)


def _project_phaseouts(blob, tables, table) -> dict:
    from hometax.engines.brackets import default_housing_for
    from hometax.engines.phaseout import DeductionPhaseoutProjector

    projector = DeductionPhaseoutProjector(tables)
    household = blob.household()
    phaseouts = {}
    for row in table.rows:
        housing = blob.housing.get(row.jurisdiction) or default_housing_for(row.jurisdiction)
        phaseouts[row.jurisdiction] = projector.project(
            household,
            tables.jurisdiction(row.jurisdiction),
            housing,
            outcome=row.outcome,
        )
    return phaseouts


def _to_decimal(value: Optional[float]) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def compare(
    scenario_file: Optional[Path] = ScenarioFileOption,
    name: Optional[str] = NameOption,
    db: Path = DbOption,
    tables: Optional[Path] = TablesOption,
    state: Optional[list[str]] = StateOption,
    baseline: Optional[str] = BaselineOption,
    rent: bool = typer.Option(False, "--rent", help="Show the renting outcome instead of buying"),
) -> None:
    """Compare tax burden, take-home pay and housing cost across jurisdictions."""
    from rich.console import Console
    from rich.table import Table

    from hometax.reports.comparison import money, percent, signed_money

    config = _load_tables(tables)
    blob = _load_blob(scenario_file, name, db)
    table = _run_comparison(blob, config, state, baseline)

    console = Console()
    choice = "Rent" if rent else "Buy"
    tbl = Table(title=f"{config.tax_year} Comparison ({choice})", show_header=True)
    tbl.add_column("State", style="cyan", no_wrap=True)
    tbl.add_column("Federal", justify="right")
    tbl.add_column("State+Local", justify="right")
    tbl.add_column("Payroll", justify="right")
    tbl.add_column("Eff. Rate", justify="right")
    tbl.add_column("Take-Home/mo", justify="right", style="green")
    tbl.add_column("Housing/mo", justify="right")
    tbl.add_column("Net/mo", justify="right", style="bold")
    tbl.add_column("vs Base", justify="right")
    for row in table.rows:
        o = row.outcome.rent if rent and row.outcome.rent else row.outcome
        tbl.add_row(
            row.abbreviation,
            money(o.federal_tax),
            money(o.state_tax + o.payroll_levy + o.local_tax),
            money(o.payroll_tax),
            percent(o.effective_tax_rate),
            money(o.monthly_take_home),
            money(o.monthly_housing_cost),
            money(o.monthly_net_cash),
            signed_money(row.monthly_net_cash_delta),
        )
    console.print(tbl)

    typer.echo(f"Baseline: {table.baseline}")
    for row in table.rows:
        typer.echo(
            f"{row.jurisdiction}: buying saves {money(row.tax_savings)}/mo in tax; "
            f"net mortgage cost {money(row.net_mortgage_cost)}/mo "
            f"({signed_money(row.rent_vs_buy_delta)}/mo vs rent)"
        )
        if not rent:
            for note in row.outcome.notes:
                typer.echo(f"  * {note}")


@app.command()
def phaseout(
    scenario_file: Optional[Path] = ScenarioFileOption,
    name: Optional[str] = NameOption,
    db: Path = DbOption,
    tables: Optional[Path] = TablesOption,
    state: Optional[list[str]] = StateOption,
) -> None:
    """Show how take-home pay falls as mortgage interest deductions shrink (years 2-10)."""
    from rich.console import Console
    from rich.table import Table

    from hometax.reports.comparison import money, signed_money

    config = _load_tables(tables)
    blob = _load_blob(scenario_file, name, db)
    table = _run_comparison(blob, config, state, None)
    phaseouts = _project_phaseouts(blob, config, table)

    console = Console()
    for jurisdiction, years in phaseouts.items():
        typer.echo(f"{jurisdiction}:")
        if all(y.interest == 0 for y in years):
            typer.echo("  No amortizing mortgage.")
            continue
        tbl = Table(show_header=True)
        tbl.add_column("Year", justify="right")
        tbl.add_column("Interest", justify="right")
        tbl.add_column("Federal/mo", justify="right")
        tbl.add_column("State/mo", justify="right")
        tbl.add_column("Total/mo", justify="right", style="bold")
        for y in years:
            tbl.add_row(
                str(y.year),
                money(y.interest),
                signed_money(y.federal_monthly_delta),
                signed_money(y.state_monthly_delta),
                signed_money(y.monthly_take_home_delta),
            )
        console.print(tbl)


@app.command()
def retire(
    scenario_file: Optional[Path] = ScenarioFileOption,
    name: Optional[str] = NameOption,
    db: Path = DbOption,
    tables: Optional[Path] = TablesOption,
    state: Optional[list[str]] = StateOption,
    baseline: Optional[str] = BaselineOption,
    current_age: Optional[int] = typer.Option(None, "--current-age", help="Age today"),
    retirement_age: Optional[int] = typer.Option(None, "--retirement-age", help="Planned retirement age"),
    growth: Optional[float] = typer.Option(None, "--growth", help="Annual growth rate in percent"),
    target: Optional[float] = typer.Option(None, "--target", help="Financial-independence asset target"),
    assets: Optional[float] = typer.Option(None, "--assets", help="Invested assets today"),
    contribution: Optional[float] = typer.Option(
        None, "--contribution", help="Annual contribution in the baseline jurisdiction"
    ),
    rent: bool = typer.Option(False, "--rent", help="Project savings while renting"),
) -> None:
    """Project the savings differential to retirement and backsolve years to FI."""
    from rich.console import Console
    from rich.table import Table

    from hometax.engines.retirement import RetirementProjector
    from hometax.models.enums import HousingChoice
    from hometax.reports.comparison import money, signed_money

    config = _load_tables(tables)
    blob = _load_blob(scenario_file, name, db)

    overrides = {
        "current_age": current_age,
        "retirement_age": retirement_age,
        "growth_rate": _to_decimal(growth),
        "fi_target": _to_decimal(target),
        "current_assets": _to_decimal(assets),
        "baseline_annual_contribution": _to_decimal(contribution),
        "baseline_jurisdiction": baseline,
    }
    if rent:
        overrides["housing_choice"] = HousingChoice.RENT
    settings = blob.retirement_settings().model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    table = _run_comparison(blob, config, state, settings.baseline_jurisdiction)
    projections = RetirementProjector(settings).project(table, blob.discretionary_expenses)

    console = Console()
    tbl = Table(
        title=f"Retirement (age {settings.current_age} to {settings.retirement_age}, "
        f"{settings.growth_rate}% growth)",
        show_header=True,
    )
    tbl.add_column("State", style="cyan", no_wrap=True)
    tbl.add_column("Savings/mo", justify="right")
    tbl.add_column("Diff/yr", justify="right")
    tbl.add_column("Diff at Retirement", justify="right", style="green")
    tbl.add_column("Contribution/yr", justify="right")
    tbl.add_column("Years to FI", justify="right", style="bold")
    for p in projections:
        tbl.add_row(
            config.jurisdiction(p.jurisdiction).label,
            money(p.monthly_net_savings),
            signed_money(p.annual_savings_differential),
            signed_money(p.differential_at_retirement),
            money(p.annual_contribution),
            p.years_to_target.display,
        )
    console.print(tbl)

    typer.echo(f"FI target: {money(settings.fi_target)}")
    for p in projections:
        age = f"age {p.fi_age:.1f}" if p.fi_age is not None else "not reachable"
        typer.echo(f"{p.jurisdiction}: {p.years_to_target.display} ({age})")


@app.command()
def report(
    scenario_file: Optional[Path] = ScenarioFileOption,
    name: Optional[str] = NameOption,
    db: Path = DbOption,
    tables: Optional[Path] = TablesOption,
    state: Optional[list[str]] = StateOption,
    baseline: Optional[str] = BaselineOption,
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the report to a file"),
    include_phaseout: bool = typer.Option(True, "--phaseout/--no-phaseout", help="Include the phase-out section"),
    include_retirement: bool = typer.Option(
        True, "--retirement/--no-retirement", help="Include the retirement section"
    ),
) -> None:
    """Render a full plain-text comparison report."""
    from hometax.engines.retirement import RetirementProjector
    from hometax.reports import ComparisonReportGenerator

    config = _load_tables(tables)
    blob = _load_blob(scenario_file, name, db)
    table = _run_comparison(blob, config, state, baseline)

    phaseouts = _project_phaseouts(blob, config, table) if include_phaseout else None
    projections = None
    if include_retirement:
        settings = blob.retirement_settings()
        if baseline is not None:
            settings = settings.model_copy(update={"baseline_jurisdiction": baseline})
        projections = RetirementProjector(settings).project(table, blob.discretionary_expenses)

    text = ComparisonReportGenerator().render(
        table, phaseouts=phaseouts, projections=projections, tax_year=config.tax_year
    )
    if output is None:
        typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text)
    typer.echo(f"Report written to {output}")


# ---------------------------------------------------------------------------
# Scenario persistence
# ---------------------------------------------------------------------------


def _open_repository(db: Path):
    from hometax.db.repository import ScenarioRepository
    from hometax.db.schema import create_schema

    db.parent.mkdir(parents=True, exist_ok=True)
    conn = create_schema(db)
    return conn, ScenarioRepository(conn)


@scenario_app.command("save")
def scenario_save(
    scenario_name: str = typer.Argument(..., help="Name to save the scenario under"),
    scenario_file: Optional[Path] = ScenarioFileOption,
    db: Path = DbOption,
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing scenario"),
) -> None:
    """Save a scenario file (or the default scenario) under a name."""
    blob = _load_blob(scenario_file, None, db)
    conn, repo = _open_repository(db)
    try:
        if repo.exists(scenario_name):
            if not overwrite:
                typer.echo(
                    f"Error: Scenario '{scenario_name}' already exists. Use --overwrite to replace it.",
                    err=True,
                )
                raise typer.Exit(1)
            repo.update(scenario_name, blob)
            typer.echo(f"Updated scenario '{scenario_name}'")
        else:
            repo.save(scenario_name, blob)
            typer.echo(f"Saved scenario '{scenario_name}'")
    finally:
        conn.close()


@scenario_app.command("list")
def scenario_list(db: Path = DbOption) -> None:
    """List saved scenarios."""
    if not db.exists():
        typer.echo("No saved scenarios.")
        return
    conn, repo = _open_repository(db)
    try:
        rows = repo.list_scenarios()
    finally:
        conn.close()
    if not rows:
        typer.echo("No saved scenarios.")
        return
    for row in rows:
        typer.echo(f"{row['name']}  (updated {row['updated_at']})")


@scenario_app.command("show")
def scenario_show(
    scenario_name: str = typer.Argument(..., help="Saved scenario name"),
    db: Path = DbOption,
) -> None:
    """Print a saved scenario as JSON."""
    blob = _load_blob(None, scenario_name, db)
    typer.echo(blob.model_dump_json(indent=2))


@scenario_app.command("delete")
def scenario_delete(
    scenario_name: str = typer.Argument(..., help="Saved scenario name"),
    db: Path = DbOption,
) -> None:
    """Delete a saved scenario."""
    from hometax.exceptions import ScenarioNotFoundError

    if not db.exists():
        typer.echo(f"Error: Scenario not found: {scenario_name}", err=True)
        raise typer.Exit(1)
    conn, repo = _open_repository(db)
    try:
        repo.delete(scenario_name)
    except ScenarioNotFoundError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)
    finally:
        conn.close()
    typer.echo(f"Deleted scenario '{scenario_name}'")
