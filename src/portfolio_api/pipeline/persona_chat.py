"""Persona chat - answers site visitors as the portfolio owner."""

from __future__ import annotations

import logging
import time
from typing import Any

from portfolio_api.clients.llm_client import LLMClient
from portfolio_api.logging.cost_calculator import usage_metadata
from portfolio_api.models.chat import ChatReply, ChatTurn

logger = logging.getLogger(__name__)

ARCHITECTURE = "persona-chat"

SYSTEM_PROMPT = """\
You are {name}, answering questions from visitors to your personal
portfolio website. Speak in the first person, warmly and concisely
(2-5 sentences unless asked for detail). Talk about your work, projects,
skills and interests. If you do not know something about yourself from
the profile below, say so instead of making it up. Politely steer
unrelated requests back to your work.

Profile:
{profile}"""


def sanitize_history(history: list[Any] | None, max_turns: int) -> list[ChatTurn]:
    """Keep the well-formed user/assistant turns, most recent ``max_turns``.

    The Messages API requires the first message to come from the user, so
    a leading assistant turn is dropped.
    """
    turns: list[ChatTurn] = []
    for item in history or []:
        if not isinstance(item, dict):
            continue
        role = item.get("role")
        content = item.get("content")
        if role not in ("user", "assistant") or not isinstance(content, str):
            continue
        if not content.strip():
            continue
        turns.append(ChatTurn(role=role, content=content))

    if max_turns > 0:
        turns = turns[-max_turns:]
    else:
        turns = []
    while turns and turns[0].role != "user":
        turns.pop(0)
    return turns


class PersonaChat:
    def __init__(
        self,
        llm: LLMClient,
        name: str = "Rushil",
        profile: str = "",
        model: str = "claude-haiku-4-5-20251001",
        max_tokens: int = 1024,
        max_history_turns: int = 20,
    ):
        self.llm = llm
        self.name = name
        self.profile = profile or f"{name} is a software engineer."
        self.model = model
        self.max_tokens = max_tokens
        self.max_history_turns = max_history_turns

    async def chat(self, message: str, history: list[Any] | None = None) -> ChatReply:
        """Reply to ``message`` given the prior conversation."""
        turns = sanitize_history(history, self.max_history_turns)
        start = time.monotonic()
        response = await self.llm.generate(
            prompt=message,
            system=SYSTEM_PROMPT.format(name=self.name, profile=self.profile),
            model=self.model,
            temperature=0.7,
            max_tokens=self.max_tokens,
            history=[t.model_dump() for t in turns],
        )
        latency_ms = int((time.monotonic() - start) * 1000)
        logger.debug("Persona reply in %d ms (%d prior turns)", latency_ms, len(turns))

        return ChatReply(
            text=response.text.strip(),
            metadata=usage_metadata(response, ARCHITECTURE, latency_ms),
        )
