"""CLI entry point for vylobot."""

import os

import click

from cli.commands import ask, chat, kb, review, serve, teach
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", "config_path", type=click.Path(dir_okay=False), help="Config file")
def cli(verbose: bool, config_path: str | None):
    """Vylozzone customer chatbot: message understanding and adaptive learning."""
    if config_path:
        os.environ["VYLOBOT_CONFIG"] = config_path

    from cli.config import load_config_model

    level, json_mode, log_file = "WARNING", False, None
    try:
        cfg = load_config_model()
        level, json_mode, log_file = cfg.logging.level, cfg.logging.json_mode, cfg.paths.log_file
    except ValueError:
        # surfaced by get_components when a command needs the config
        pass
    setup_logging(json_mode=json_mode, level="DEBUG" if verbose else level, log_file=log_file)


cli.add_command(chat)
cli.add_command(ask)
cli.add_command(teach)
cli.add_command(kb)
cli.add_command(review)
cli.add_command(serve)


if __name__ == "__main__":
    cli()
