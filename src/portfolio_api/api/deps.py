"""Service container shared by the route modules."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from portfolio_api.admin import AdminQuery
from portfolio_api.clients.llm_client import LLMClient
from portfolio_api.clients.scraper import PageScraper
from portfolio_api.config import AppConfig
from portfolio_api.logging.interaction_log import InteractionLog
from portfolio_api.pipeline.content_fetcher import ContentFetcher
from portfolio_api.pipeline.job_fit_analyst import JobFitAnalyst
from portfolio_api.pipeline.persona_chat import PersonaChat
from portfolio_api.pipeline.plan_engine import PlanEngine
from portfolio_api.pipeline.plan_writer import PlanWriter


@dataclass
class Services:
    config: AppConfig
    fetcher: ContentFetcher
    plan_engine: PlanEngine
    persona: PersonaChat
    interaction_log: InteractionLog
    admin: AdminQuery


def build_services(config: AppConfig) -> Services:
    """Wire the production collaborators from ``config``."""
    llm = LLMClient(timeout=config.llm.timeout, max_retries=config.llm.max_retries)
    profile = config.persona.load_profile()
    scraper = PageScraper(
        timeout_ms=config.scrape.timeout_ms,
        settle_ms=config.scrape.settle_ms,
    )
    interaction_log = InteractionLog(
        config.store.database_url,
        write_attempts=config.store.write_attempts,
    )
    return Services(
        config=config,
        fetcher=ContentFetcher(scraper.scrape, min_text_length=config.scrape.min_text_length),
        plan_engine=PlanEngine(
            PlanWriter(
                llm,
                model=config.llm.plan_model,
                max_tokens=config.llm.plan_max_tokens,
                temperature=config.llm.temperature,
            ),
            JobFitAnalyst(
                llm,
                model=config.llm.fit_model,
                max_tokens=config.llm.fit_max_tokens,
                profile=profile,
            ),
        ),
        persona=PersonaChat(
            llm,
            name=config.persona.name,
            profile=profile,
            model=config.llm.chat_model,
            max_tokens=config.llm.chat_max_tokens,
            max_history_turns=config.persona.max_history_turns,
        ),
        interaction_log=interaction_log,
        admin=AdminQuery(interaction_log, config.admin.key),
    )


def get_services(request: Request) -> Services:
    """FastAPI dependency: the container attached by ``create_app``."""
    return request.app.state.services
