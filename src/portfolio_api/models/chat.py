"""Pydantic models for the persona chatbot."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from portfolio_api.models.plan import CamelModel, UsageMetadata


class ChatTurn(BaseModel):
    role: str  # "user" | "assistant"
    content: str


class ChatRequest(CamelModel):
    message: str | None = None
    # Kept loose: malformed turns are dropped by the persona, not rejected.
    conversation_history: list[Any] | None = None


class ChatReply(BaseModel):
    text: str
    metadata: UsageMetadata
