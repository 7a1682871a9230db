"""Plan Writer - drafts a 90-day plan for a company and role."""

from __future__ import annotations

import time

from portfolio_api.clients.llm_client import LLMClient
from portfolio_api.logging.cost_calculator import usage_metadata
from portfolio_api.models.plan import PlanDraft

ARCHITECTURE = "parallel-plan-and-fit"

SYSTEM_PROMPT = """\
You are an experienced engineering leader helping a candidate prepare a
concrete 30-60-90 day plan for a new role. Write in first person, as the
candidate, in Markdown.

Structure the plan exactly as:
## Days 1-30: Learn
## Days 31-60: Contribute
## Days 61-90: Lead

Under each heading give 4-6 bullet points that reference the company's
products, the responsibilities in the job description and measurable
outcomes. Finish with a short "## How I'll measure success" section.
Do not invent facts about the company that are not implied by the job
description; keep assumptions explicit."""


class PlanWriter:
    def __init__(
        self,
        llm: LLMClient,
        model: str = "claude-sonnet-4-5-20250929",
        max_tokens: int = 4096,
        temperature: float = 0.4,
    ):
        self.llm = llm
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def write(self, company_name: str, jd_text: str) -> PlanDraft:
        """Draft the plan and report the usage of the call that produced it."""
        prompt = f"""Company: {company_name}

Job description:
---
{jd_text}
---

Write my 90-day plan for this role."""

        start = time.monotonic()
        response = await self.llm.generate(
            prompt=prompt,
            system=SYSTEM_PROMPT,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        latency_ms = int((time.monotonic() - start) * 1000)

        return PlanDraft(
            plan=response.text.strip(),
            metadata=usage_metadata(response, ARCHITECTURE, latency_ms),
        )
