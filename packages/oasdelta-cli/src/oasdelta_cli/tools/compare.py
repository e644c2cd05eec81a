import logging
from typing import Optional

import click

_SEVERITY_COLORS = {"Breaking": "red", "Warning": "yellow", "Change": "blue"}


def _log_level(verbose: int) -> Optional[int]:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return None


@click.command("compare")
@click.argument("base", type=click.Path(path_type=str, dir_okay=False, exists=False))
@click.argument("current", type=click.Path(path_type=str, dir_okay=False, exists=False))
@click.option(
    "--policy",
    type=click.Path(path_type=str, dir_okay=False, exists=False),
    help="Diff policy YAML (fail_on, ignore_rules, include_unchanged, compare_routes).",
)
@click.option(
    "--export",
    type=click.Path(path_type=str, dir_okay=False),
    help="Write the full report to this path.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["yaml", "json"], case_sensitive=False),
    default="yaml",
    show_default=True,
    help="Export format.",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Treat warnings as failures (exit code 2).",
)
@click.option(
    "--min-severity",
    type=click.Choice(["Breaking", "Warning", "Change"], case_sensitive=False),
    default="Change",
    show_default=True,
    help="Only print findings at or above this severity.",
)
@click.option(
    "--routes/--no-routes",
    default=None,
    help="Also compare operations under paths (default: from policy).",
)
@click.option("-v", "--verbose", count=True, help="Log progress (-vv for debug).")
def compare(
    base: str,
    current: str,
    policy: Optional[str],
    export: Optional[str],
    fmt: str,
    strict: bool,
    min_severity: str,
    routes: Optional[bool],
    verbose: int,
) -> None:
    """Compare two OpenAPI documents and classify every difference."""
    import sys

    import yaml
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    from oasdelta_core.codebase.log import configure_logger
    from oasdelta_core.data.policy import load_diff_policy
    from oasdelta_core.diff import run_diff
    from oasdelta_core.models.severity import SEVERITIES, severity_at_least

    console = Console()
    configure_logger(_log_level(verbose))
    threshold = min_severity.capitalize()

    try:
        diff_policy = load_diff_policy(policy)
        if routes is not None:
            diff_policy = diff_policy.model_copy(update={"compare_routes": routes})

        console.print(f"\n[bold cyan]OpenAPI Diff[/bold cyan] {base} -> {current}")
        report = run_diff(base, current, policy=diff_policy)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error during comparison: {escape(str(e))}[/red]")
        sys.exit(1)

    # Export report if requested
    if export:
        with open(export, "w") as f:
            if fmt.lower() == "json":
                f.write(report.model_dump_json(indent=2))
            else:
                yaml.dump(report.model_dump(), f, default_flow_style=False, sort_keys=True)
        console.print(f"[green]✓[/green] Report exported to {export}")

    # Print summary table
    table = Table(title="Diff Summary")
    table.add_column("Severity", style="cyan")
    table.add_column("Results", justify="right")
    table.add_column("Violations", justify="right")
    for level in SEVERITIES:
        table.add_row(
            level,
            str(report.summary["results_by_severity"][level]),
            str(report.summary["violations_by_severity"][level]),
            style=_SEVERITY_COLORS[level],
        )
    console.print(table)

    # Print findings, Breaking first
    shown = 0
    for level, group in report.grouped_by_severity():
        if not severity_at_least(level, threshold):
            continue
        color = _SEVERITY_COLORS[level]
        console.print(f"\n[bold {color}]{level}[/bold {color}]")
        for record in group:
            console.print(f"[bold]{escape(record.name)}[/bold] ({record.kind})")
            for v in record.violations:
                if not severity_at_least(v.severity, threshold):
                    continue
                vcolor = _SEVERITY_COLORS[v.severity]
                console.print(f"  [{vcolor}]{v.severity}[/{vcolor}] {v.rule}: {escape(v.description)} [dim]({escape(v.context)})[/dim]")
                shown += 1
    if not shown:
        console.print("\n[green]✓ No differences to report[/green]")

    # Determine exit code from the policy threshold
    failing = [r for r in report.results if r.changed and severity_at_least(r.severity, diff_policy.fail_on)]
    warn_count = report.summary["violations_by_severity"]["Warning"]

    if failing:
        console.print(f"\n[red]✗[/red] {len(failing)} results at or above {diff_policy.fail_on}")
        sys.exit(1)
    elif strict and warn_count > 0:
        console.print(f"\n[yellow]⚠[/yellow] Comparison completed with {warn_count} warnings (strict mode)")
        sys.exit(2)
    else:
        console.print("\n[green]✓[/green] Comparison completed successfully")
        sys.exit(0)
