"""Inbound message webhook."""

import asyncio

import structlog
from fastapi import APIRouter, Depends

from cascade import InboundMessage
from web.deps import get_router, verify_webhook_token
from web.models import MessageIn, MessageOut

logger = structlog.get_logger()

router = APIRouter(
    prefix="/api/messages",
    tags=["messages"],
    dependencies=[Depends(verify_webhook_token)],
)


@router.post("", response_model=MessageOut)
async def post_message(body: MessageIn, message_router=Depends(get_router)):
    message = InboundMessage(
        sender_id=body.sender_id,
        conversation_id=body.conversation_id,
        text=body.text,
        media_ref=body.media_ref,
    )
    # Routing touches files and possibly the LLM; keep it off the event loop
    reply = await asyncio.to_thread(message_router.handle, message)
    return MessageOut(reply=reply.text, source=reply.source, stage=reply.stage)
