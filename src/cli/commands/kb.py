"""Knowledge base CLI commands: stats, list, lookup, reset."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components

console = Console()


@click.group()
def kb():
    """Learned knowledge: what the bot has been taught or derived."""
    pass


@kb.command("stats")
def kb_stats():
    """Show entry counts by provenance and review status."""
    c = get_components(with_llm=False)
    stats = c["kb"].stats()
    review = c["review"].stats()

    table = Table(title="Knowledge Base")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Entries", str(stats["total"]))
    table.add_row("Active patterns", str(stats["patterns"]))
    for provenance, count in stats["by_provenance"].items():
        table.add_row(f"  {provenance}", str(count))
    table.add_row("Pending review", str(stats["pending_review"]))
    table.add_row("Unknown cases", str(review["unknown_cases"]))
    table.add_row("Learning rate", review["learning_rate"])
    table.add_row("Last learned", stats["last_learned"] or "-")
    console.print(table)


@kb.command("list")
@click.option("-p", "--provenance", type=click.Choice(["operator_taught", "derived", "pending_review"]))
@click.option("-n", "--limit", default=20, help="Max entries to show")
def kb_list(provenance: str | None, limit: int):
    """List the most recent entries."""
    from shared_types import Provenance

    c = get_components(with_llm=False)
    entries = c["kb"].entries(Provenance(provenance) if provenance else None)
    if not entries:
        console.print("[yellow]No entries.[/]")
        return

    table = Table(title=f"Knowledge ({len(entries)} total)")
    table.add_column("ID", justify="right")
    table.add_column("Trigger")
    table.add_column("Response", max_width=60)
    table.add_column("Provenance")
    table.add_column("Conf", justify="right")
    table.add_column("Servable")
    for entry in entries[-limit:]:
        table.add_row(
            str(entry.id),
            entry.trigger,
            entry.response,
            entry.provenance.value,
            f"{entry.confidence:.2f}",
            "yes" if entry.servable else "no",
        )
    console.print(table)


@kb.command("lookup")
@click.argument("message")
def kb_lookup(message: str):
    """Show which learned answer a message would get, if any."""
    c = get_components(with_llm=False)
    match = c["kb"].lookup(message)
    if match is None:
        console.print("[yellow]No learned match.[/]")
        return
    console.print(
        f"[green]#{match.entry_id}[/] via {match.method} (confidence {match.confidence:.2f})"
    )
    console.print(match.response)


@kb.command("reset")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def kb_reset(yes: bool):
    """Delete every learned entry and pattern."""
    if not yes:
        click.confirm("Delete all learned knowledge?", abort=True)
    c = get_components(with_llm=False)
    removed = c["kb"].reset()
    console.print(f"[green]Removed {removed} entries.[/]")
