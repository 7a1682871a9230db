"""Data models for plan generation and the persona chatbot."""

from portfolio_api.models.chat import ChatReply, ChatRequest, ChatTurn
from portfolio_api.models.plan import (
    PlanDraft,
    PlanRequest,
    PlanResult,
    TokenUsage,
    UsageMetadata,
    is_url,
)

__all__ = [
    "ChatReply",
    "ChatRequest",
    "ChatTurn",
    "PlanDraft",
    "PlanRequest",
    "PlanResult",
    "TokenUsage",
    "UsageMetadata",
    "is_url",
]
