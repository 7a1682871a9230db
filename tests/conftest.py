"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from portfolio_api.admin import AdminQuery
from portfolio_api.api.app import create_app
from portfolio_api.api.deps import Services
from portfolio_api.clients.llm_client import LLMClient, LLMResponse
from portfolio_api.config import AdminConfig, AppConfig, StoreConfig
from portfolio_api.logging.interaction_log import InteractionLog
from portfolio_api.models.chat import ChatReply
from portfolio_api.models.plan import PlanDraft, TokenUsage, UsageMetadata
from portfolio_api.pipeline.content_fetcher import ContentFetcher
from portfolio_api.pipeline.plan_engine import PlanEngine

ADMIN_KEY = "s3cret-admin-key"

SAMPLE_PLAN = """## Days 1-30: Learn
- Meet every engineer on the payments team

## Days 31-60: Contribute
- Ship the first checkout latency fix

## Days 61-90: Lead
- Own the reliability roadmap"""

SAMPLE_JOB_FIT = "**Fit score:** 82/100\n\n**Strengths**\n- Payments experience"


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior Backend Engineer, Payments

We are looking for an engineer to design and operate our payment APIs.
You will own reliability of checkout, work with Python and PostgreSQL,
and mentor two junior engineers."""


@pytest.fixture
def sample_usage() -> UsageMetadata:
    return UsageMetadata(
        latency_ms=1234,
        model="claude-sonnet-4-5-20250929",
        architecture="parallel-plan-and-fit",
        cost_usd=0.0123,
        tokens=TokenUsage(input=900, output=600, total=1500),
    )


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(
            text="hello", input_tokens=100, output_tokens=50, model="claude-haiku-4-5-20251001"
        )
    )
    return client


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'interactions.db'}"


@pytest_asyncio.fixture
async def interaction_log(database_url: str):
    log = InteractionLog(database_url, write_attempts=1)
    yield log
    await log.dispose()


@pytest.fixture
def mock_scrape(sample_jd_text: str) -> AsyncMock:
    return AsyncMock(return_value=sample_jd_text)


@pytest.fixture
def mock_plan_writer(sample_usage: UsageMetadata) -> MagicMock:
    writer = MagicMock()
    writer.write = AsyncMock(return_value=PlanDraft(plan=SAMPLE_PLAN, metadata=sample_usage))
    return writer


@pytest.fixture
def mock_fit_analyst() -> MagicMock:
    analyst = MagicMock()
    analyst.analyze = AsyncMock(return_value=SAMPLE_JOB_FIT)
    return analyst


@pytest.fixture
def mock_persona() -> MagicMock:
    usage = UsageMetadata(
        latency_ms=640,
        model="claude-haiku-4-5-20251001",
        architecture="persona-chat",
        cost_usd=0.0004,
        tokens=TokenUsage(input=250, output=30, total=280),
    )
    persona = MagicMock()
    persona.chat = AsyncMock(
        return_value=ChatReply(text="I mostly build web tools.", metadata=usage)
    )
    return persona


@pytest.fixture
def services(
    interaction_log: InteractionLog,
    database_url: str,
    mock_scrape: AsyncMock,
    mock_plan_writer: MagicMock,
    mock_fit_analyst: MagicMock,
    mock_persona: MagicMock,
) -> Services:
    config = AppConfig(
        store=StoreConfig(database_url=database_url, write_attempts=1),
        admin=AdminConfig(key=ADMIN_KEY),
    )
    return Services(
        config=config,
        fetcher=ContentFetcher(mock_scrape, min_text_length=50),
        plan_engine=PlanEngine(mock_plan_writer, mock_fit_analyst),
        persona=mock_persona,
        interaction_log=interaction_log,
        admin=AdminQuery(interaction_log, ADMIN_KEY),
    )


@pytest_asyncio.fixture
async def client(services: Services):
    """Async test client. Background tasks finish before each call returns."""
    app = create_app(services=services)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
