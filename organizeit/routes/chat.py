"""
POST /chat/message -- the dashboard assistant.

Replies come from organizeit.assistant (keyword match, no model behind
it). Both sides of the exchange are kept under chat:<userId>:<epoch_ms>,
the bot's reply one millisecond after the user's message so the pair
sorts in order.
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends

from organizeit.assistant import select_response
from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.errors import masked
from organizeit.models.schemas import ChatRequest, ChatResponse
from organizeit.store import KVStore
from organizeit.telemetry import iso

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_authorization)])


def _reply(req: ChatRequest, now: float) -> ChatResponse:
    canned = select_response(req.message)
    return ChatResponse(
        response=canned.content,
        suggestions=list(canned.suggestions),
        timestamp=iso(now),
    )


@router.post(
    "/chat/message",
    response_model=ChatResponse,
    summary="Ask the assistant",
    description=(
        "Matches the message against cost, alert, ESG and AI keywords (in that "
        "order) and answers with the corresponding canned reply."
    ),
    tags=["Assistant"],
)
@masked(lambda req, clock, **_: _reply(req, clock()))
async def chat_message(
    req: ChatRequest,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> ChatResponse:
    now = clock()
    ms = int(now * 1000)
    logger.info("Chat message from %s (%d chars)", req.user_id, len(req.message))

    await store.set(f"chat:{req.user_id}:{ms}", {
        "user_id": req.user_id,
        "message": req.message,
        "context": req.context,
        "timestamp": iso(now),
        "type": "user",
    })

    reply = _reply(req, now)

    await store.set(f"chat:{req.user_id}:{ms + 1}", {
        "user_id": req.user_id,
        "message": reply.response,
        "context": req.context,
        "timestamp": reply.timestamp,
        "type": "bot",
        "suggestions": reply.suggestions,
    })

    return reply
