"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from observability import log_run_summary
from web.routes import knowledge, messages

logger = structlog.get_logger()


def create_app(components: dict | None = None) -> FastAPI:
    """Build the app. Pass ``components`` to skip loading config (tests)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if components is None:
            from cli.utils import get_components

            app.state.components = get_components()
        else:
            app.state.components = components

        c = app.state.components
        sessions = c.get("sessions")
        if sessions is not None and "config_model" in c:
            sessions.start_sweeper(c["config_model"].session.sweep_interval)
        logger.info("web.startup")
        yield
        if sessions is not None:
            sessions.stop_sweeper()
        if "metrics" in c:
            log_run_summary(c["metrics"])
        logger.info("web.shutdown")

    app = FastAPI(title="vylobot", version="0.1.0", lifespan=lifespan)
    app.include_router(messages.router)
    app.include_router(knowledge.router)

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
