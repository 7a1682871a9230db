"""Pydantic models for plan generation requests and results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def is_url(text: str) -> bool:
    """Return True if the trimmed text starts with an http(s) scheme."""
    stripped = text.strip()
    return stripped.startswith("http://") or stripped.startswith("https://")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TokenUsage(BaseModel):
    input: int = Field(default=0, ge=0)
    output: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)


class UsageMetadata(CamelModel):
    latency_ms: int = Field(default=0, ge=0)
    model: str = "unknown"
    architecture: str = "unknown"
    cost_usd: float = Field(default=0.0, ge=0)
    tokens: TokenUsage = Field(default_factory=TokenUsage)

    @classmethod
    def unknown(cls, latency_ms: int = 0) -> UsageMetadata:
        """Sentinel metadata for a provider that reported no usage."""
        return cls(latency_ms=max(latency_ms, 0))


class PlanRequest(CamelModel):
    """Body of POST /analyze-company. Fields are optional so that missing
    values surface as a 400 from the handler rather than a schema error."""

    company_name: str | None = None
    job_description: str | None = None


class PlanDraft(BaseModel):
    """Current plan-writer output shape: text plus usage metadata."""

    plan: str
    metadata: UsageMetadata


class PlanResult(CamelModel):
    plan: str
    job_fit: str
    metadata: UsageMetadata
