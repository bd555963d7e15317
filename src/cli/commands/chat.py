"""Conversational CLI commands: chat REPL, one-shot ask, owner teaching."""

import sys

import click
from rich.console import Console
from rich.panel import Panel

from cli.utils import get_components

console = Console()

CLI_CONVERSATION = "cli"
_SOURCE_STYLES = {
    "cascade": "green",
    "learned": "cyan",
    "generative": "magenta",
    "teaching": "yellow",
    "command": "yellow",
    "session": "blue",
    "error": "red",
}


def _print_reply(reply, show_source: bool = True):
    if reply.text is None:
        console.print("[dim](no reply)[/]")
        return
    style = _SOURCE_STYLES.get(reply.source, "white")
    title = f"{reply.source}:{reply.stage}" if reply.stage else reply.source
    console.print(Panel(reply.text, title=title if show_source else None, border_style=style))


@click.command()
@click.option("--sender", default="cli-user", help="Sender id to chat as")
@click.option("--owner", is_flag=True, help="Treat the sender as the shop owner")
def chat(sender: str, owner: bool):
    """Interactive chat with the bot. Type 'exit' to quit."""
    from cascade import InboundMessage
    from cascade.router import sender_number
    from observability import log_run_summary

    c = get_components()
    router = c["router"]
    if owner:
        router.owner_ids.add(sender_number(sender))

    role = "owner" if owner else "customer"
    console.print(f"[bold]Vylozzone bot[/] ({role} [cyan]{sender}[/]). Type 'exit' to quit.\n")

    while True:
        try:
            text = console.input("[bold cyan]you>[/] ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if text.strip().lower() in ("exit", "quit"):
            break
        if not text.strip():
            continue
        _print_reply(router.handle(InboundMessage(sender, CLI_CONVERSATION, text)))

    log_run_summary(c["metrics"])


@click.command()
@click.argument("message")
@click.option("--sender", default="cli-user", help="Sender id")
@click.option("--owner", is_flag=True, help="Treat the sender as the shop owner")
def ask(message: str, sender: str, owner: bool):
    """Send one message and print the reply."""
    from cascade import InboundMessage
    from cascade.router import sender_number

    c = get_components()
    router = c["router"]
    if owner:
        router.owner_ids.add(sender_number(sender))

    reply = router.handle(InboundMessage(sender, CLI_CONVERSATION, message))
    _print_reply(reply)
    if reply.source == "error":
        sys.exit(1)


@click.command()
@click.argument("text")
def teach(text: str):
    """Teach the bot, e.g. 'ajari bot: cara bayar -> Pembayaran via QRIS'."""
    from knowledge import TeachingParser
    from shared_types import Provenance

    pair = TeachingParser().parse(text)
    if pair is None:
        console.print("[red]Could not parse a trigger and response from that text.[/]")
        sys.exit(1)

    c = get_components(with_llm=False)
    verdict = c["guard"].validate_teaching(pair.trigger, pair.response, {"sender": "cli"})
    if not verdict.can_learn:
        console.print(f"[red]Blocked:[/] {verdict.reason}")
        sys.exit(1)

    entry = c["kb"].learn(pair.trigger, pair.response, Provenance.OPERATOR_TAUGHT, source="cli")
    console.print(f"[green]Learned #{entry.id}[/] ({pair.pattern})")
    console.print(f"  [bold]trigger:[/]  {entry.trigger}")
    console.print(f"  [bold]response:[/] {entry.response}")
