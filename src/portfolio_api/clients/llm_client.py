"""Claude API wrapper with async support."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import anthropic

from portfolio_api.errors import ProviderError

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int
    model: str


class LLMClient:
    """Async Claude API client.

    Calls are not retried: both endpoints that use it have a person
    waiting on the answer.
    """

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ):
        options = {"api_key": api_key, "timeout": timeout, "max_retries": max_retries}
        # unset options keep the SDK defaults (ANTHROPIC_API_KEY from the env)
        self.client = anthropic.AsyncAnthropic(
            **{name: value for name, value in options.items() if value is not None}
        )

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str = "claude-haiku-4-5-20251001",
        temperature: float = 0.0,
        max_tokens: int = 4096,
        history: list[dict] | None = None,
    ) -> LLMResponse:
        """Send a prompt to Claude and return the text response with usage.

        ``history`` holds prior ``{"role", "content"}`` turns placed before
        the prompt.
        """
        messages = list(history or [])
        messages.append({"role": "user", "content": prompt})
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": messages,
        }
        if system:
            kwargs["system"] = system

        logger.debug("LLM call: model=%s, %d messages", model, len(messages))
        try:
            message = await self.client.messages.create(**kwargs)
        except anthropic.AnthropicError as exc:
            logger.error("LLM call failed", exc_info=True)
            raise ProviderError(str(exc) or type(exc).__name__) from exc

        text = message.content[0].text if message.content else ""
        if not text.strip():
            raise ProviderError("LLM returned an empty response")

        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        return LLMResponse(
            text=text,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            model=model,
        )
