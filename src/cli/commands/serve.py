"""Run the HTTP webhook."""

import click


@click.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8000, type=int, help="Bind port")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: str, port: int, reload: bool):
    """Serve the message webhook (POST /api/messages)."""
    import uvicorn

    uvicorn.run("web.app:app", host=host, port=port, reload=reload, log_config=None)
