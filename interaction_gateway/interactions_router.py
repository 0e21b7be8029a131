"""Discord interactions endpoint."""
import asyncio
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from interaction_gateway.classifier import classify_interaction
from interaction_gateway.constants import InteractionResponseType, InteractionType
from interaction_gateway.dependencies import verify_discord_request
from interaction_gateway.interactions import InteractionReply

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{path:path}")
async def discord_interactions(
    request: Request,
    payload: Dict[str, Any] = Depends(verify_discord_request),
):
    """Handle all Discord interactions."""
    if payload.get("type") == InteractionType.PING:
        return JSONResponse({"type": InteractionResponseType.PONG.value})

    client = request.app.state.client
    reply = InteractionReply()

    classified = classify_interaction(client, payload, reply)
    if classified is None:
        return Response(status_code=204)

    event, interaction = classified
    tasks = client.emit(event, interaction)

    if tasks and not reply.sent:
        await _wait_for_reply(reply, tasks)

    if reply.sent:
        return JSONResponse(reply.body, status_code=reply.status_code)

    logger.debug("No reply sent for %r", interaction)
    return Response(status_code=204)


async def _wait_for_reply(reply: InteractionReply, tasks) -> None:
    """Wait until the reply is sent or every handler task has finished."""
    waiter = asyncio.ensure_future(reply.wait())
    handlers = asyncio.gather(*tasks, return_exceptions=True)
    try:
        await asyncio.wait({waiter, handlers}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        if not waiter.done():
            waiter.cancel()
