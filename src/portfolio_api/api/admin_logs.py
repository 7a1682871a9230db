"""GET /admin-logs - interaction log viewer for the site owner."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, Response

from portfolio_api.admin import parse_limit
from portfolio_api.api.deps import Services, get_services

router = APIRouter(tags=["Admin"])


@router.options("/admin-logs", include_in_schema=False)
async def admin_logs_preflight() -> Response:
    return Response(status_code=200)


@router.get("/admin-logs")
async def admin_logs(
    key: str | None = Query(None),
    log_type: str = Query("all", alias="type", description="plan, chatbot or all"),
    limit: str | None = Query(None),
    stats: str | None = Query(None),
    x_admin_key: str | None = Header(None),
    services: Services = Depends(get_services),
):
    return await services.admin.fetch(
        key or x_admin_key,
        log_type=log_type,
        limit=parse_limit(limit, services.config.store.default_limit),
        include_stats=stats == "true",
    )
