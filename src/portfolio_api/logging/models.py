"""Interaction log data models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class PlanLogEntry(BaseModel):
    """One plan-generation attempt, as handed to the interaction log.

    Callers set exactly one of ``plan`` / ``error``.
    """

    company_name: str | None = None
    job_description: str | None = None  # raw input; the URL when one was given
    is_url: bool = False
    plan: str | None = None
    job_fit: str | None = None
    metadata: dict[str, Any] | None = None
    error: str | None = None


class ChatLogEntry(BaseModel):
    """One chatbot attempt, as handed to the interaction log."""

    message: str | None = None
    conversation_history_length: int = 0  # prior turns, not characters
    response: str | None = None
    metadata: dict[str, Any] | None = None
    error: str | None = None


class PlanLogRecord(PlanLogEntry):
    """A stored plan-generation row."""

    id: int
    timestamp: datetime
    job_description_length: int = 0
    plan_length: int = 0
    job_fit_length: int = 0

    def to_admin_view(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "userInput": {
                "companyName": self.company_name,
                "jobDescription": self.job_description,
                "jobDescriptionLength": self.job_description_length,
                "isUrl": self.is_url,
            },
            "modelOutput": {
                "plan": self.plan,
                "planLength": self.plan_length,
                "jobFit": self.job_fit,
                "jobFitLength": self.job_fit_length,
            },
            "metadata": self.metadata or {},
            "error": self.error,
        }


class ChatLogRecord(ChatLogEntry):
    """A stored chatbot row."""

    id: int
    timestamp: datetime
    message_length: int = 0
    response_length: int = 0

    def to_admin_view(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "userInput": {
                "message": self.message,
                "messageLength": self.message_length,
                "conversationHistoryLength": self.conversation_history_length,
            },
            "modelOutput": {
                "response": self.response,
                "responseLength": self.response_length,
            },
            "metadata": self.metadata or {},
            "error": self.error,
        }
