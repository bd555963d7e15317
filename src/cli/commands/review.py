"""Review CLI commands: pending candidates and unanswered messages."""

import sys

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components

console = Console()


@click.group()
def review():
    """Approve or reject candidate answers before the bot serves them."""
    pass


@review.command("queue")
def review_queue():
    """List entries waiting for review."""
    c = get_components(with_llm=False)
    pending = c["review"].pending()
    if not pending:
        console.print("[green]Review queue is empty.[/]")
        return

    table = Table(title=f"Pending review ({len(pending)})")
    table.add_column("ID", justify="right")
    table.add_column("Input")
    table.add_column("Response", max_width=60)
    table.add_column("Conf", justify="right")
    table.add_column("Source")
    for entry in pending:
        table.add_row(
            str(entry.id),
            entry.trigger,
            entry.response,
            f"{entry.confidence:.2f}",
            entry.source,
        )
    console.print(table)


@review.command("approve")
@click.argument("entry_id", type=int)
def review_approve(entry_id: int):
    """Approve a pending entry so it can be served."""
    c = get_components(with_llm=False)
    entry = c["review"].approve(entry_id)
    if entry is None:
        console.print(f"[red]No pending entry with id {entry_id}.[/]")
        sys.exit(1)
    console.print(f"[green]Approved #{entry.id}:[/] {entry.trigger}")


@review.command("reject")
@click.argument("entry_id", type=int)
def review_reject(entry_id: int):
    """Reject a pending entry."""
    c = get_components(with_llm=False)
    entry = c["review"].reject(entry_id)
    if entry is None:
        console.print(f"[red]No pending entry with id {entry_id}.[/]")
        sys.exit(1)
    console.print(f"[yellow]Rejected #{entry.id}.[/]")


@review.command("auto")
def review_auto():
    """Approve every pending entry above the auto-learn confidence."""
    c = get_components(with_llm=False)
    learned = c["review"].auto_learn()
    console.print(f"[green]Auto-learned {len(learned)} entries.[/]")


@review.command("cases")
@click.option("-n", "--limit", default=10, help="Max cases to show")
def review_cases(limit: int):
    """Show recent messages nothing could answer."""
    c = get_components(with_llm=False)
    cases = c["review"].unknown_cases(limit)
    if not cases:
        console.print("[yellow]No unknown cases recorded.[/]")
        return

    table = Table(title="Unknown cases")
    table.add_column("When")
    table.add_column("Message")
    table.add_column("Reply", max_width=50)
    for case in cases:
        table.add_row(case.get("timestamp", "")[:16], case.get("message", ""), case.get("response") or "-")
    console.print(table)
