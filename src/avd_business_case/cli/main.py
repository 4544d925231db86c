"""Main CLI entry point for AVD Business Case."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from avd_business_case import __version__
from avd_business_case.case import (
    BusinessCaseBuilder,
    BusinessCaseResult,
    CurrentStateConfig,
    CustomerProfile,
    FutureStateConfig,
)
from avd_business_case.config import get_settings
from avd_business_case.costing import PLATFORMS
from avd_business_case.persistence import SCENARIO_KINDS, ScenarioRepository
from avd_business_case.rates import get_rate_table
from avd_business_case.timeline import (
    FACTOR_CATALOG,
    RecommendationType,
    TimelineCalculator,
    TimelineRequest,
    TimelineResult,
)

console = Console()
logger = logging.getLogger(__name__)

RECOMMENDATION_STYLES = {
    RecommendationType.CRITICAL.value: "bold red",
    RecommendationType.WARNING.value: "yellow",
    RecommendationType.SUCCESS.value: "green",
    RecommendationType.ACTION.value: "cyan",
}


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _parse_factor_options(pairs: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated ``--factor id=value`` options."""
    values = {}
    for pair in pairs:
        factor_id, sep, value = pair.partition("=")
        if not sep or not factor_id.strip():
            raise click.BadParameter(f"expected id=value, got '{pair}'", param_hint="--factor")
        values[factor_id.strip()] = value.strip()
    return values


def _write_output(output: Path, data: dict[str, Any]) -> None:
    with open(output, "w") as f:
        json.dump(data, f, indent=2)
    console.print(f"\n[green]Results saved to {output}[/green]")


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def cli(verbose: bool) -> None:
    """AVD Business Case - migration timeline and TCO/ROI calculator.

    Score the complexity of an Azure Virtual Desktop migration against a
    go-live date, and build the cost and return-on-investment case for it.
    """
    setup_logging(verbose)


@cli.command()
def factors() -> None:
    """List complexity factors.

    Show every scored factor with its category, default value and the
    weight applied at values 1, 2 and 3.
    """
    table = Table(title="Complexity Factors")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category", style="blue")
    table.add_column("Default", justify="right")
    table.add_column("Weights (1/2/3)", justify="right", style="yellow")

    for definition in FACTOR_CATALOG:
        table.add_row(
            definition.id,
            definition.name,
            definition.category,
            str(definition.default_value),
            "/".join(str(w) for w in definition.weights),
        )

    console.print(table)
    console.print("\n[dim]Score per factor = value x weight at that value.[/dim]")


@cli.command()
@click.option(
    "--start-date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    required=True,
    help="Project start date (YYYY-MM-DD)",
)
@click.option(
    "--go-live-date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    required=True,
    help="Target go-live date (YYYY-MM-DD)",
)
@click.option(
    "--factor",
    "factor_pairs",
    multiple=True,
    help="Factor value as id=value (repeatable, e.g. --factor apps=3)",
)
@click.option(
    "--factors-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON object of factor values by id",
)
@click.option("--save", "save_name", help="Save the result as a named scenario")
@click.option(
    "--output",
    type=click.Path(path_type=Path),
    help="Output file for results (JSON)",
)
def timeline(
    start_date,
    go_live_date,
    factor_pairs: tuple[str, ...],
    factors_file: Path | None,
    save_name: str | None,
    output: Path | None,
) -> None:
    """Assess timeline feasibility.

    Score the migration's complexity, derive the weeks required, schedule
    the six standard phases with overlaps and compare against the weeks
    available before go-live. Factors not supplied use their defaults.
    """
    values: dict[str, Any] = {}
    if factors_file:
        with open(factors_file) as f:
            file_values = json.load(f)
        if not isinstance(file_values, dict):
            raise click.BadParameter("must contain a JSON object", param_hint="--factors-file")
        values.update(file_values)
    values.update(_parse_factor_options(factor_pairs))

    try:
        request = TimelineRequest(
            start_date=start_date.date(),
            go_live_date=go_live_date.date(),
            factor_values=values,
        )
        result = TimelineCalculator().calculate(request)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        logger.exception("Timeline calculation failed")
        sys.exit(1)

    _display_timeline(result)

    if output:
        _write_output(output, {"inputs": request.to_dict(), "result": result.to_dict()})

    if save_name:
        repo = ScenarioRepository()
        scenario_id = repo.save_scenario(
            kind="timeline",
            name=save_name,
            inputs=request.to_dict(),
            result=result.to_dict(),
        )
        console.print(f"\n[green]Saved scenario: {scenario_id}[/green]")
        console.print(f"  View report: avd-business-case report --scenario-id {scenario_id}")


@cli.command("business-case")
@click.option("--company", required=True, help="Customer company name")
@click.option("--users", type=int, required=True, help="Total number of users")
@click.option(
    "--platform",
    type=click.Choice(PLATFORMS, case_sensitive=False),
    required=True,
    help="Current desktop platform",
)
@click.option("--servers", type=int, default=10, show_default=True, help="Servers in the current estate")
@click.option("--monthly-cost", type=float, help="Known current monthly cost (overrides the estimate)")
@click.option("--industry", help="Customer industry")
@click.option("--profile", "user_profile", help="Workload profile (light, medium, heavy, power)")
@click.option("--storage-type", help="Storage type (standardSSD, premiumSSD)")
@click.option("--storage-per-user", type=float, help="Profile storage per user in GB")
@click.option("--nerdio/--no-nerdio", default=True, help="Include Nerdio Manager")
@click.option("--years", type=click.Choice(["1", "3", "5"]), help="Analysis period in years")
@click.option("--notes", default="", help="Free-form notes stored with the case")
@click.option("--save", "save_name", help="Save the result as a named scenario")
@click.option(
    "--output",
    type=click.Path(path_type=Path),
    help="Output file for results (JSON)",
)
def business_case(
    company: str,
    users: int,
    platform: str,
    servers: int,
    monthly_cost: float | None,
    industry: str | None,
    user_profile: str | None,
    storage_type: str | None,
    storage_per_user: float | None,
    nerdio: bool,
    years: str | None,
    notes: str,
    save_name: str | None,
    output: Path | None,
) -> None:
    """Build a TCO and ROI business case.

    Estimate the current platform's cost, size the AVD estate, compare
    total cost of ownership and synthesize the ROI including operational,
    productivity and security value.
    """
    settings = get_settings()

    try:
        profile = CustomerProfile(
            company_name=company,
            total_users=users,
            current_platform=platform.lower(),
            current_server_count=servers,
            user_profile=user_profile or settings.default_user_profile,
            industry=industry,
        )
        current_config = CurrentStateConfig(custom_monthly_cost=monthly_cost)
        future_config = FutureStateConfig(
            storage_type=storage_type or settings.default_storage_type,
            storage_per_user_gb=(
                storage_per_user
                if storage_per_user is not None
                else settings.default_storage_per_user_gb
            ),
            include_nerdio=nerdio,
            time_horizon_years=int(years) if years else settings.default_time_horizon,
            notes=notes,
        )
        result = BusinessCaseBuilder().build(profile, current_config, future_config)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        logger.exception("Business case failed")
        sys.exit(1)

    _display_business_case(result)

    inputs = {
        "customer_profile": profile.to_dict(),
        "current_state": current_config.to_dict(),
        "future_state": future_config.to_dict(),
    }

    if output:
        _write_output(output, {"inputs": inputs, "result": result.to_dict()})

    if save_name:
        repo = ScenarioRepository()
        scenario_id = repo.save_scenario(
            kind="business_case",
            name=save_name,
            inputs=inputs,
            result=result.to_dict(),
            company_name=company,
            user_count=users,
        )
        console.print(f"\n[green]Saved scenario: {scenario_id}[/green]")
        console.print(f"  View report: avd-business-case report --scenario-id {scenario_id}")


@cli.command()
@click.option(
    "--limit",
    default=20,
    help="Maximum number of scenarios to show",
)
@click.option(
    "--kind",
    type=click.Choice(SCENARIO_KINDS),
    help="Only show scenarios of this kind",
)
def history(limit: int, kind: str | None) -> None:
    """List saved scenarios.

    Show saved timeline and business case scenarios, newest first.
    """
    repo = ScenarioRepository()
    scenarios = repo.list_scenarios(limit=limit, kind=kind)

    if not scenarios:
        console.print("[yellow]No scenarios found.[/yellow]")
        console.print("Run 'avd-business-case timeline' or 'business-case' with --save to create one.")
        return

    table = Table(title="Saved Scenarios")
    table.add_column("ID", style="cyan")
    table.add_column("Created", style="green")
    table.add_column("Kind", style="blue")
    table.add_column("Name")
    table.add_column("Company")
    table.add_column("Users", justify="right")

    for s in scenarios:
        table.add_row(
            s["id"],
            str(s["created_at"])[:19],
            s["kind"],
            s["name"],
            s["company_name"] or "-",
            f"{s['user_count']:,}" if s["user_count"] else "-",
        )

    console.print(table)


@cli.command()
@click.option(
    "--scenario-id",
    required=True,
    help="Scenario ID to generate report for",
)
@click.option(
    "--format",
    type=click.Choice(["text", "json", "markdown"]),
    default="text",
    help="Output format",
)
def report(scenario_id: str, format: str) -> None:
    """View scenario report.

    Display a saved timeline or business case scenario.
    """
    repo = ScenarioRepository()

    scenario = repo.get_scenario(scenario_id)
    if not scenario:
        console.print(f"[red]Scenario not found: {scenario_id}[/red]")
        sys.exit(1)

    if format == "json":
        console.print_json(data=scenario)
    elif format == "markdown":
        _print_markdown_report(scenario)
    else:
        _print_text_report(scenario)


@cli.command()
@click.option(
    "--scenario-id",
    required=True,
    help="Scenario ID to delete",
)
@click.confirmation_option(prompt="Are you sure you want to delete this scenario?")
def delete(scenario_id: str) -> None:
    """Delete a saved scenario."""
    repo = ScenarioRepository()

    if repo.delete_scenario(scenario_id):
        console.print(f"[green]Deleted scenario: {scenario_id}[/green]")
    else:
        console.print(f"[red]Scenario not found: {scenario_id}[/red]")
        sys.exit(1)


@cli.command()
def config() -> None:
    """Show current configuration.

    Display the configuration settings and business case defaults.
    """
    settings = get_settings()

    console.print(Panel.fit(
        "[bold]AVD Business Case Configuration[/bold]",
        title="Config",
    ))

    table = Table(show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Database", str(settings.db_path))
    table.add_row("Rate Table", str(settings.rate_table_file or "built-in defaults"))
    table.add_row("Default Time Horizon", f"{settings.default_time_horizon} years")
    table.add_row("Default User Profile", settings.default_user_profile)
    table.add_row("Default Storage Type", settings.default_storage_type)
    table.add_row("Default Storage/User", f"{settings.default_storage_per_user_gb:g} GB")
    table.add_row("Log Level", settings.log_level)

    console.print(table)


@cli.command()
def rates() -> None:
    """Show the active rate table.

    Display VM sizing, storage pricing and the tiered Nerdio and
    implementation pricing used by the cost engine.
    """
    try:
        table_data = get_rate_table()
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        logger.exception("Loading rate table failed")
        sys.exit(1)

    console.print(Panel.fit(
        f"[bold]Rate Table[/bold]\nVersion: {table_data.version}",
        title="Rates",
    ))

    table = Table(title="VM Profiles")
    table.add_column("Profile", style="cyan")
    table.add_column("SKU")
    table.add_column("Users/VM", justify="right")
    table.add_column("Monthly/VM", justify="right", style="yellow")
    for p in table_data.vm_profiles:
        table.add_row(p.key, p.sku, str(p.users_per_vm), f"${p.monthly_cost_per_vm:,.2f}")
    console.print(table)

    table = Table(title="Storage")
    table.add_column("Type", style="cyan")
    table.add_column("Per GB/Month", justify="right", style="yellow")
    for s in table_data.storage:
        table.add_row(s.key, f"${s.cost_per_gb_month:.2f}")
    console.print(table)

    table = Table(title="Nerdio Manager Tiers")
    table.add_column("Tier", style="cyan")
    table.add_column("Up To Users", justify="right")
    table.add_column("Per User/Month", justify="right", style="yellow")
    for t in table_data.nerdio_tiers:
        limit = f"<{t.max_users:,}" if t.max_users is not None else "unlimited"
        table.add_row(t.label, limit, f"${t.price_per_user:.2f}")
    console.print(table)

    table = Table(title="Implementation Tiers")
    table.add_column("Tier", style="cyan")
    table.add_column("Up To Users", justify="right")
    table.add_column("Cost", justify="right", style="yellow")
    table.add_column("Weeks", justify="right")
    for t in table_data.implementation_tiers:
        limit = f"<{t.max_users:,}" if t.max_users is not None else "unlimited"
        table.add_row(t.label, limit, f"${t.total_cost:,.0f}", str(t.duration_weeks))
    console.print(table)


def _display_timeline(result: TimelineResult) -> None:
    """Display timeline feasibility in console."""
    status = "[bold green]ON TRACK[/bold green]" if result.is_feasible else "[bold red]AT RISK[/bold red]"
    console.print(Panel.fit(
        f"Complexity score: {result.total_score}\n"
        f"Weeks available: {result.weeks_available}\n"
        f"Weeks required: {result.weeks_required_with_overlap:g} "
        f"(sequential {result.weeks_required_sequential})\n"
        f"Buffer: {result.delta:+g} weeks  {status}",
        title="Timeline Feasibility",
    ))

    table = Table(title="Phase Schedule")
    table.add_column("Phase", style="cyan")
    table.add_column("Weeks", justify="right")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Overlap", style="yellow")

    for phase in result.phases:
        overlap = (
            f"{phase.overlap_weeks:g}w - {phase.overlap_description}"
            if phase.overlaps_with_previous
            else ""
        )
        table.add_row(
            phase.name,
            f"{phase.weeks:g}",
            f"{phase.start_week:g}",
            f"{phase.end_week:g}",
            overlap,
        )
    console.print(table)

    console.print(
        f"Parallel execution saves {result.overlap.total_time_saved:g} weeks "
        f"({result.overlap.efficiency_gain_percent}% efficiency gain)"
    )

    top = Table(title="Top Complexity Drivers")
    top.add_column("Factor", style="cyan")
    top.add_column("Value", justify="right")
    top.add_column("Score", justify="right", style="yellow")
    for row in result.breakdown[:5]:
        top.add_row(row.name, str(row.value), str(row.score))
    console.print(top)

    if result.recommendations:
        console.print("\n[bold]Recommendations[/bold]")
        for rec in result.recommendations:
            style = RECOMMENDATION_STYLES[rec.type.value]
            console.print(f"  [{style}]{rec.type.value.upper()}[/{style}] {escape(rec.text)}")


def _display_business_case(result: BusinessCaseResult) -> None:
    """Display business case in console."""
    tco = result.tco
    roi = result.roi

    console.print(Panel.fit(
        f"[bold blue]{result.customer_profile.company_name}[/bold blue]\n"
        f"{result.customer_profile.total_users:,} users on {result.current_state.platform}, "
        f"{tco.years}-year horizon",
        title="AVD Business Case",
    ))

    table = Table(title="Cost Comparison")
    table.add_column("", style="cyan")
    table.add_column("Current", justify="right")
    table.add_column("AVD", justify="right")
    table.add_row(
        "Monthly",
        f"${result.current_state.monthly:,.2f}",
        f"${result.future_state.monthly_net:,.2f}",
    )
    table.add_row(
        "Annual",
        f"${tco.current_state.annual_cost:,.2f}",
        f"${tco.future_state.annual_cost:,.2f}",
    )
    table.add_row(
        f"{tco.years}-year total",
        f"${tco.current_state.total_cost:,.2f}",
        f"${tco.future_state.total_cost:,.2f}",
    )
    console.print(table)
    console.print(
        f"Savings: ${tco.savings_total:,.2f} ({tco.savings_percentage:.1f}%) - {tco.recommendation}"
    )

    table = Table(title="Annual Value")
    table.add_column("Component", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Infrastructure savings", f"${roi.infrastructure_savings:,.2f}")
    table.add_row("Operational efficiency", f"${roi.operational.total_annual:,.2f}")
    table.add_row("Productivity gains", f"${roi.productivity.total_annual:,.2f}")
    table.add_row("Security & compliance", f"${roi.security.total_annual:,.2f}")
    table.add_row("[bold]Total[/bold]", f"[bold]${roi.total_annual_value:,.2f}[/bold]")
    console.print(table)

    payback = f"{roi.payback_months:.1f} months" if roi.payback_months is not None else "never"
    console.print(
        f"Implementation: ${result.implementation_cost.total_cost:,.0f} "
        f"({result.implementation_cost.tier}), payback {payback}, "
        f"ROI {roi.roi_year1:.0f}% / {roi.roi_year3:.0f}% / {roi.roi_year5:.0f}% (1/3/5 yr), "
        f"NPV ${roi.net_present_value:,.2f}"
    )
    console.print(f"\n{roi.summary}")


def _print_text_report(scenario: dict[str, Any]) -> None:
    """Print text format report."""
    console.print(Panel.fit(
        f"[bold]{scenario['name']}[/bold]\n"
        f"ID: {scenario['id']}\n"
        f"Kind: {scenario['kind']}\n"
        f"Created: {scenario['created_at']}",
        title="Scenario",
    ))

    result = scenario["result"]
    if scenario["kind"] == "timeline":
        console.print(f"\nComplexity score: {result['total_score']}")
        console.print(f"Weeks available: {result['weeks_available']}")
        console.print(f"Weeks required: {result['weeks_required_with_overlap']:g}")
        console.print(f"Buffer: {result['delta']:+g} weeks")
        if result["recommendations"]:
            console.print(f"\n[bold]Recommendations ({len(result['recommendations'])}):[/bold]")
            for r in result["recommendations"]:
                label = escape(f"[{r['type']}]")
                console.print(f"  • {label} {escape(r['text'])}")
    else:
        tco = result["tco"]
        roi = result["roi"]
        console.print(f"\nCompany: {scenario['company_name']} ({scenario['user_count']:,} users)")
        console.print(f"Total savings: ${tco['savings']['total']:,.2f} ({tco['savings']['percentage']:.1f}%)")
        console.print(f"Total annual value: ${roi['annual_value']['total_annual']:,.2f}")
        console.print(f"NPV: ${roi['net_present_value']:,.2f}")
        console.print(f"\n{roi['summary']}")


def _print_markdown_report(scenario: dict[str, Any]) -> None:
    """Print markdown format report."""
    result = scenario["result"]
    lines = [
        f"# Scenario Report: {scenario['name']}",
        "",
        f"**ID:** {scenario['id']}",
        f"**Kind:** {scenario['kind']}",
        f"**Created:** {scenario['created_at']}",
        "",
    ]

    if scenario["kind"] == "timeline":
        lines.extend([
            "## Timeline",
            "",
            f"- Complexity score: {result['total_score']}",
            f"- Weeks available: {result['weeks_available']}",
            f"- Weeks required: {result['weeks_required_with_overlap']:g}",
            f"- Buffer: {result['delta']:+g} weeks",
            "",
            "## Phases",
            "",
            "| Phase | Weeks | Start | End |",
            "|-------|-------|-------|-----|",
        ])
        for p in result["phases"]:
            lines.append(f"| {p['name']} | {p['weeks']:g} | {p['start_week']:g} | {p['end_week']:g} |")
        if result["recommendations"]:
            lines.extend(["", "## Recommendations", ""])
            for r in result["recommendations"]:
                lines.append(f"- **{r['type']}**: {r['text']}")
    else:
        annual = result["roi"]["annual_value"]
        lines.extend([
            f"**Company:** {scenario['company_name']}",
            f"**Users:** {scenario['user_count']:,}",
            "",
            "## Annual Value",
            "",
            "| Component | Value |",
            "|-----------|-------|",
            f"| Infrastructure savings | ${annual['infrastructure_savings']:,.2f} |",
            f"| Operational efficiency | ${annual['operational_savings']:,.2f} |",
            f"| Productivity gains | ${annual['productivity_gains']:,.2f} |",
            f"| Security & compliance | ${annual['security_value']:,.2f} |",
            f"| **Total** | **${annual['total_annual']:,.2f}** |",
            "",
            "## Summary",
            "",
            result["roi"]["summary"],
        ])

    console.print("\n".join(lines))


if __name__ == "__main__":
    cli()
