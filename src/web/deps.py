"""Dependency injection for FastAPI routes."""

import hmac
import os

import structlog
from fastapi import Header, HTTPException, Request

logger = structlog.get_logger()

WEBHOOK_TOKEN_ENV = "VYLOBOT_WEBHOOK_TOKEN"


def get_components(request: Request) -> dict:
    """Component graph built once in the app lifespan."""
    return request.app.state.components


def get_router(request: Request):
    return get_components(request)["router"]


def verify_webhook_token(x_webhook_token: str | None = Header(default=None)) -> None:
    """Require X-Webhook-Token when VYLOBOT_WEBHOOK_TOKEN is set."""
    expected = os.getenv(WEBHOOK_TOKEN_ENV)
    if not expected:
        return
    if not x_webhook_token or not hmac.compare_digest(x_webhook_token, expected):
        logger.warning("webhook_token_rejected")
        raise HTTPException(status_code=401, detail="Invalid webhook token")
