"""USD cost estimates and usage metadata for Claude calls."""

from __future__ import annotations

from typing import NamedTuple

from portfolio_api.clients.llm_client import LLMResponse
from portfolio_api.models.plan import TokenUsage, UsageMetadata


class ModelPrice(NamedTuple):
    input_per_mtok: float
    output_per_mtok: float


MODEL_PRICING: dict[str, ModelPrice] = {
    "claude-haiku-4-5-20251001": ModelPrice(1.00, 5.00),
    "claude-sonnet-4-5-20250929": ModelPrice(3.00, 15.00),
    "claude-opus-4-1-20250805": ModelPrice(15.00, 75.00),
}


def call_cost(model_id: str, input_tokens: int, output_tokens: int) -> float:
    """Cost of one call; models missing from the table are free."""
    price = MODEL_PRICING.get(model_id)
    if price is None:
        return 0.0
    return (input_tokens * price.input_per_mtok + output_tokens * price.output_per_mtok) / 1_000_000


def calculate_cost(calls: list[tuple[str, int, int]]) -> float:
    """Total for ``(model_id, input_tokens, output_tokens)`` calls, rounded to 6 places."""
    return round(sum(call_cost(*call) for call in calls), 6)


def usage_metadata(response: LLMResponse, architecture: str, latency_ms: int) -> UsageMetadata:
    return UsageMetadata(
        latency_ms=latency_ms,
        model=response.model,
        architecture=architecture,
        cost_usd=calculate_cost([(response.model, response.input_tokens, response.output_tokens)]),
        tokens=TokenUsage(
            input=response.input_tokens,
            output=response.output_tokens,
            total=response.input_tokens + response.output_tokens,
        ),
    )
