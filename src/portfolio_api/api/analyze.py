"""POST /analyze-company - 90-day plan and job-fit analysis."""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Response
from fastapi.responses import JSONResponse

from portfolio_api.api.deps import Services, get_services
from portfolio_api.errors import InputValidationError, ScrapeError
from portfolio_api.logging.models import PlanLogEntry
from portfolio_api.models.plan import PlanRequest, is_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Plan Generator"])


@router.options("/analyze-company", include_in_schema=False)
async def analyze_company_preflight() -> Response:
    return Response(status_code=200)


@router.post("/analyze-company")
async def analyze_company(
    payload: PlanRequest,
    background_tasks: BackgroundTasks,
    services: Services = Depends(get_services),
):
    """Generate a 90-day plan and a job-fit analysis.

    Every attempt that passes validation is logged once, after the
    response has been computed.
    """
    company_name = payload.company_name or ""
    job_description = payload.job_description or ""
    if not company_name.strip() or not job_description.strip():
        raise InputValidationError(error="Company name and job description are required")

    # Classify before resolution replaces the URL with scraped text.
    attempt = PlanLogEntry(
        company_name=company_name,
        job_description=job_description,
        is_url=is_url(job_description),
    )

    try:
        jd_text = await services.fetcher.resolve(job_description)
        result = await services.plan_engine.generate(company_name, jd_text)
    except ScrapeError as exc:
        logger.info("Job description URL could not be resolved: %s", exc.error)
        background_tasks.add_task(
            services.interaction_log.append_plan_record,
            attempt.model_copy(update={"error": f"{exc.error}: {exc.message}"}),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error, "message": exc.message},
        )
    except Exception as exc:
        logger.error("Error analyzing company", exc_info=True)
        message = str(exc) or type(exc).__name__
        background_tasks.add_task(
            services.interaction_log.append_plan_record,
            attempt.model_copy(update={"error": message}),
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to analyze company", "message": message},
        )

    body = result.model_dump(by_alias=True)
    background_tasks.add_task(
        services.interaction_log.append_plan_record,
        attempt.model_copy(
            update={
                "plan": result.plan,
                "job_fit": result.job_fit,
                "metadata": body["metadata"],
            }
        ),
    )
    return body
