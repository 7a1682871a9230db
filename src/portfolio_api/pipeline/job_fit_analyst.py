"""Job Fit Analyst - scores how well the portfolio owner fits a role."""

from __future__ import annotations

from portfolio_api.clients.llm_client import LLMClient

SYSTEM_PROMPT = """\
You assess how well a candidate fits a job. Respond in Markdown with:

**Fit score:** <0-100>/100

**Strengths**
- 3-5 bullets tying the candidate's background to the role

**Gaps**
- 1-3 bullets, each with a concrete way to close the gap

Be candid and brief. Base the assessment only on the job description and
the candidate profile below.

Candidate profile:
{profile}"""

DEFAULT_PROFILE = (
    "Product-minded software engineer with full-stack web experience, "
    "applied LLM work, and a habit of shipping small tools end to end."
)


class JobFitAnalyst:
    def __init__(
        self,
        llm: LLMClient,
        model: str = "claude-haiku-4-5-20251001",
        max_tokens: int = 1024,
        profile: str = "",
    ):
        self.llm = llm
        self.model = model
        self.max_tokens = max_tokens
        self.profile = profile or DEFAULT_PROFILE

    async def analyze(self, company_name: str, jd_text: str) -> str:
        """Return the fit assessment as Markdown text."""
        prompt = f"""Company: {company_name}

Job description:
---
{jd_text}
---

How well do I fit this role?"""

        response = await self.llm.generate(
            prompt=prompt,
            system=SYSTEM_PROMPT.format(profile=self.profile),
            model=self.model,
            max_tokens=self.max_tokens,
        )
        return response.text.strip()
