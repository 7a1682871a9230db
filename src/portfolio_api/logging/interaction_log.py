"""Append-only audit trail of plan-generation and chatbot calls.

Nothing in this module raises to its callers: the log is diagnostic
infrastructure and must never fail the request it describes. Failures
are reported through ``logging`` and otherwise swallowed.
"""

from __future__ import annotations

import logging

from sqlalchemy import Table, func, select
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool
from tenacity import AsyncRetrying, stop_after_attempt, wait_random_exponential

from portfolio_api.errors import StoreError
from portfolio_api.logging.models import (
    ChatLogEntry,
    ChatLogRecord,
    PlanLogEntry,
    PlanLogRecord,
)
from portfolio_api.logging.tables import chatbot_logs, log_metadata, plan_generator_logs

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 1000

# libpq connection-string options with no asyncpg.connect() keyword
LIBPQ_ONLY_PARAMS = (
    "channel_binding",
    "options",
    "gssencmode",
    "application_name",
    "connect_timeout",
    "keepalives",
    "keepalives_idle",
    "sslcert",
    "sslkey",
    "sslrootcert",
    "sslcrl",
)


def to_async_url(url: str) -> str:
    """Rewrite a plain database URL to use an asyncio driver.

    For PostgreSQL, libpq's ``sslmode`` becomes asyncpg's ``ssl`` and
    query parameters that asyncpg.connect() would reject are dropped.
    """
    parsed = make_url(url)
    if parsed.get_backend_name() in ("postgres", "postgresql"):
        sslmode = parsed.query.get("sslmode")
        parsed = parsed.set(drivername="postgresql+asyncpg").difference_update_query(
            ("sslmode", *LIBPQ_ONLY_PARAMS)
        )
        if sslmode and "ssl" not in parsed.query:
            parsed = parsed.update_query_dict({"ssl": sslmode})
        return parsed.render_as_string(hide_password=False)
    if parsed.drivername == "sqlite":
        return parsed.set(drivername="sqlite+aiosqlite").render_as_string(hide_password=False)
    return url


def _length(value: str | None) -> int:
    return len(value) if value else 0


class InteractionLog:
    """SQL-backed store for plan and chatbot interaction records."""

    def __init__(
        self,
        database_url: str | None,
        write_attempts: int = 3,
        engine: AsyncEngine | None = None,
    ):
        self.database_url = database_url
        self.write_attempts = write_attempts
        self._engine = engine
        if not database_url and engine is None:
            logger.error(
                "DATABASE_URL is not set; interaction logs will not be persisted"
            )

    def _get_engine(self) -> AsyncEngine:
        if self._engine is None:
            if not self.database_url:
                raise StoreError("DATABASE_URL is not set")
            url = to_async_url(self.database_url)
            if url.startswith("sqlite"):
                self._engine = create_async_engine(url)
            else:
                # Pooling is left to the database side (serverless friendly).
                self._engine = create_async_engine(url, poolclass=NullPool, pool_pre_ping=True)
        return self._engine

    async def ensure_schema(self) -> None:
        """Create both log tables and their timestamp indexes if missing.

        Safe to call any number of times.
        """
        engine = self._get_engine()
        async with engine.begin() as conn:
            await conn.run_sync(log_metadata.create_all, checkfirst=True)

    async def _insert(self, table: Table, values: dict) -> None:
        engine = self._get_engine()
        try:
            await self.ensure_schema()
        except Exception:
            # Another writer may be provisioning at the same moment; the
            # insert below decides whether the store is usable.
            logger.warning("Schema provisioning failed for %s", table.name, exc_info=True)

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.write_attempts),
            wait=wait_random_exponential(multiplier=0.5, max=5),
            reraise=True,
        ):
            with attempt:
                async with engine.begin() as conn:
                    await conn.execute(table.insert().values(**values))

    async def append_plan_record(self, entry: PlanLogEntry) -> None:
        """Persist a plan-generation attempt. Never raises."""
        try:
            values = {
                "company_name": entry.company_name,
                "job_description": entry.job_description,
                "job_description_length": _length(entry.job_description),
                "is_url": entry.is_url,
                "plan": entry.plan,
                "plan_length": _length(entry.plan),
                "job_fit": entry.job_fit,
                "job_fit_length": _length(entry.job_fit),
                "metadata": entry.metadata,
                "error": entry.error,
            }
            await self._insert(plan_generator_logs, values)
        except Exception:
            logger.error("Failed to write plan generator log", exc_info=True)
            return
        logger.info(
            "Plan generator log saved (company=%r, error=%s)",
            entry.company_name,
            entry.error is not None,
        )

    async def append_chat_record(self, entry: ChatLogEntry) -> None:
        """Persist a chatbot attempt. Never raises."""
        try:
            values = {
                "message": entry.message,
                "message_length": _length(entry.message),
                "conversation_history_length": entry.conversation_history_length,
                "response": entry.response,
                "response_length": _length(entry.response),
                "metadata": entry.metadata,
                "error": entry.error,
            }
            await self._insert(chatbot_logs, values)
        except Exception:
            logger.error("Failed to write chatbot log", exc_info=True)
            return
        logger.info("Chatbot log saved (error=%s)", entry.error is not None)

    async def _select_recent(self, table: Table, limit: int) -> list[dict]:
        engine = self._get_engine()
        query = (
            select(table)
            .order_by(table.c.timestamp.desc(), table.c.id.desc())
            .limit(limit)
        )
        async with engine.connect() as conn:
            result = await conn.execute(query)
            return [dict(row._mapping) for row in result]

    async def list_plan_records(self, limit: int = DEFAULT_LIMIT) -> list[PlanLogRecord]:
        """Newest-first plan records; empty on any read failure."""
        try:
            rows = await self._select_recent(plan_generator_logs, limit)
            return [PlanLogRecord(**row) for row in rows]
        except Exception:
            logger.error("Error reading plan logs", exc_info=True)
            return []

    async def list_chat_records(self, limit: int = DEFAULT_LIMIT) -> list[ChatLogRecord]:
        """Newest-first chatbot records; empty on any read failure."""
        try:
            rows = await self._select_recent(chatbot_logs, limit)
            return [ChatLogRecord(**row) for row in rows]
        except Exception:
            logger.error("Error reading chatbot logs", exc_info=True)
            return []

    async def get_stats(self) -> dict:
        """Total row count per table, zeroed on failure."""
        try:
            engine = self._get_engine()
            async with engine.connect() as conn:
                plan_total = await conn.scalar(
                    select(func.count()).select_from(plan_generator_logs)
                )
                chat_total = await conn.scalar(select(func.count()).select_from(chatbot_logs))
        except Exception:
            logger.error("Error getting log stats", exc_info=True)
            return {"planGenerator": {"total": 0}, "chatbot": {"total": 0}}
        return {
            "planGenerator": {"total": int(plan_total or 0)},
            "chatbot": {"total": int(chat_total or 0)},
        }

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
