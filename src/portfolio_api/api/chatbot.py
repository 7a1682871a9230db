"""POST /chatbot - persona chat."""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Response
from fastapi.responses import JSONResponse

from portfolio_api.api.deps import Services, get_services
from portfolio_api.errors import InputValidationError
from portfolio_api.logging.models import ChatLogEntry
from portfolio_api.models.chat import ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Chatbot"])


@router.options("/chatbot", include_in_schema=False)
async def chatbot_preflight() -> Response:
    return Response(status_code=200)


@router.post("/chatbot")
async def chatbot(
    payload: ChatRequest,
    background_tasks: BackgroundTasks,
    services: Services = Depends(get_services),
):
    message = payload.message or ""
    if not message.strip():
        raise InputValidationError(error="Message is required")

    history = payload.conversation_history or []
    attempt = ChatLogEntry(message=message, conversation_history_length=len(history))

    try:
        reply = await services.persona.chat(message, history)
    except Exception as exc:
        logger.error("Error in chatbot", exc_info=True)
        error = str(exc) or type(exc).__name__
        background_tasks.add_task(
            services.interaction_log.append_chat_record,
            attempt.model_copy(update={"error": error}),
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to process chat message", "message": error},
        )

    background_tasks.add_task(
        services.interaction_log.append_chat_record,
        attempt.model_copy(
            update={
                "response": reply.text,
                "metadata": reply.metadata.model_dump(by_alias=True),
            }
        ),
    )
    return {"response": reply.text}
