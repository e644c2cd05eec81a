import click

_SEVERITY_COLORS = {"Breaking": "red", "Warning": "yellow", "Change": "blue"}


@click.command("rules")
@click.option(
    "--category",
    type=click.Choice(["Schema", "Endpoint", "Parameter", "Response", "RequestBody"], case_sensitive=False),
    help="Only list rules of this category.",
)
def rules(category: str | None) -> None:
    """List every difference kind with its category and default severity."""
    from rich.console import Console
    from rich.table import Table

    from oasdelta_core.rules import ALL_RULES

    console = Console()
    table = Table(title="Difference Rules")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Category")
    table.add_column("Severity")
    table.add_column("Meaning")

    for rule in ALL_RULES:
        if category and rule.CATEGORY.lower() != category.lower():
            continue
        color = _SEVERITY_COLORS.get(rule.SEVERITY, "white")
        table.add_row(rule.NAME, rule.CATEGORY, f"[{color}]{rule.SEVERITY}[/{color}]", rule.SUMMARY)

    console.print(table)

