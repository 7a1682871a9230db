"""Plan engine - runs plan generation and job-fit analysis together."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Protocol, Union

from portfolio_api.models.plan import PlanDraft, PlanResult, UsageMetadata

logger = logging.getLogger(__name__)

# Older plan writers returned the bare plan text with no usage data.
PlanOutput = Union[PlanDraft, str]


class PlanSource(Protocol):
    async def write(self, company_name: str, jd_text: str) -> PlanOutput: ...


class FitSource(Protocol):
    async def analyze(self, company_name: str, jd_text: str) -> str: ...


def normalize_plan_output(output: PlanOutput, started: float) -> tuple[str, UsageMetadata]:
    """Map either plan-writer shape onto ``(plan, metadata)``.

    ``started`` is the ``time.monotonic()`` value taken at dispatch; it is
    only used to time the legacy shape, which carries no metadata.
    """
    if isinstance(output, PlanDraft):
        return output.plan, output.metadata
    if isinstance(output, str):
        latency_ms = int((time.monotonic() - started) * 1000)
        return output, UsageMetadata.unknown(latency_ms)
    raise TypeError(f"Unsupported plan output type: {type(output).__name__}")


class PlanEngine:
    """Dispatches the plan and job-fit calls concurrently.

    The two calls share inputs but not results, so they run side by side;
    if either fails the whole generation fails and nothing partial is
    returned.
    """

    def __init__(self, writer: PlanSource, analyst: FitSource):
        self.writer = writer
        self.analyst = analyst

    async def generate(self, company_name: str, jd_text: str) -> PlanResult:
        started = time.monotonic()
        logger.info("Generating plan for %s (%d chars of JD)", company_name, len(jd_text))

        plan_output, job_fit = await asyncio.gather(
            self.writer.write(company_name, jd_text),
            self.analyst.analyze(company_name, jd_text),
        )

        plan, metadata = normalize_plan_output(plan_output, started)
        logger.info(
            "Plan ready for %s: model=%s, %d tokens, %d ms",
            company_name,
            metadata.model,
            metadata.tokens.total,
            metadata.latency_ms,
        )
        return PlanResult(plan=plan, job_fit=job_fit, metadata=metadata)
