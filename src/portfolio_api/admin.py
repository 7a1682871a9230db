"""Shared-secret protected read access to the interaction log."""

from __future__ import annotations

import hmac
import logging
from datetime import datetime, timezone

from portfolio_api.errors import ConfigError, InputValidationError, Unauthorized
from portfolio_api.logging.interaction_log import DEFAULT_LIMIT, InteractionLog

logger = logging.getLogger(__name__)

LOG_TYPES = ("plan", "chatbot", "all")


def parse_limit(raw: str | int | None, default: int = DEFAULT_LIMIT) -> int:
    """Positive integer limit; anything unparsable or below 1 gives ``default``."""
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def keys_match(presented: str, expected: str) -> bool:
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


class AdminQuery:
    def __init__(self, log: InteractionLog, admin_key: str | None):
        self.log = log
        self.admin_key = admin_key

    def authorize(self, presented_key: str | None) -> None:
        """Raise unless ``presented_key`` equals the configured admin key.

        A missing server-side key is a configuration problem, reported
        separately from a bad credential.
        """
        if not self.admin_key:
            logger.error("ADMIN_LOG_KEY is not set; admin log access is disabled")
            raise ConfigError(
                "ADMIN_LOG_KEY environment variable is not set. "
                "Add it to the server environment."
            )
        if not presented_key or not keys_match(presented_key, self.admin_key):
            logger.warning("Rejected admin log request with an invalid key")
            raise Unauthorized()

    async def fetch(
        self,
        presented_key: str | None,
        log_type: str = "all",
        limit: int = DEFAULT_LIMIT,
        include_stats: bool = False,
    ) -> dict:
        self.authorize(presented_key)
        if log_type not in LOG_TYPES:
            raise InputValidationError(
                f"type must be one of {', '.join(LOG_TYPES)}, got {log_type!r}"
            )

        logs: dict[str, list[dict]] = {}
        if log_type in ("plan", "all"):
            records = await self.log.list_plan_records(limit)
            logs["planGenerator"] = [r.to_admin_view() for r in records]
        if log_type in ("chatbot", "all"):
            records = await self.log.list_chat_records(limit)
            logs["chatbot"] = [r.to_admin_view() for r in records]

        result: dict = {
            "success": True,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "counts": {
                "planGenerator": len(logs.get("planGenerator", [])),
                "chatbot": len(logs.get("chatbot", [])),
            },
        }
        if include_stats:
            result["stats"] = await self.log.get_stats()
        result["logs"] = logs
        return result
