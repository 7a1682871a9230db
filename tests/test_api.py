"""Endpoint tests for the HTTP surface."""

from __future__ import annotations

from httpx import AsyncClient

from portfolio_api.errors import ProviderError
from portfolio_api.logging.interaction_log import InteractionLog
from portfolio_api.logging.models import ChatLogEntry, PlanLogEntry

from conftest import ADMIN_KEY, SAMPLE_JOB_FIT, SAMPLE_PLAN

JOB_URL = "https://jobs.example.com/acme/senior-backend"


# ============ Analyze company ============


async def test_analyze_plain_text(client: AsyncClient, interaction_log: InteractionLog, sample_jd_text, mock_scrape):
    response = await client.post(
        "/analyze-company",
        json={"companyName": "Acme", "jobDescription": sample_jd_text},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["plan"] == SAMPLE_PLAN
    assert body["jobFit"] == SAMPLE_JOB_FIT
    assert body["metadata"]["model"] == "claude-sonnet-4-5-20250929"
    assert body["metadata"]["latencyMs"] == 1234
    mock_scrape.assert_not_awaited()

    records = await interaction_log.list_plan_records()
    assert len(records) == 1
    record = records[0]
    assert record.is_url is False
    assert record.error is None
    assert record.job_description == sample_jd_text
    assert record.plan == SAMPLE_PLAN
    assert record.job_fit == SAMPLE_JOB_FIT
    assert record.metadata == body["metadata"]


async def test_analyze_url_logs_original_url(
    client: AsyncClient, interaction_log: InteractionLog, mock_plan_writer, sample_jd_text
):
    response = await client.post(
        "/analyze-company",
        json={"companyName": "Acme", "jobDescription": JOB_URL},
    )
    assert response.status_code == 200
    mock_plan_writer.write.assert_awaited_once_with("Acme", sample_jd_text)

    record = (await interaction_log.list_plan_records())[0]
    assert record.job_description == JOB_URL
    assert record.is_url is True
    assert record.error is None


async def test_analyze_url_too_short(
    client: AsyncClient, interaction_log: InteractionLog, mock_scrape, mock_plan_writer
):
    mock_scrape.return_value = "Please enable JavaScript"
    response = await client.post(
        "/analyze-company",
        json={"companyName": "Acme", "jobDescription": JOB_URL},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Could not extract job description from URL"
    assert "copy and paste" in body["message"]
    mock_plan_writer.write.assert_not_awaited()

    records = await interaction_log.list_plan_records()
    assert len(records) == 1
    assert records[0].error
    assert records[0].plan is None
    assert records[0].is_url is True
    assert records[0].job_description == JOB_URL


async def test_analyze_scraper_raises(client: AsyncClient, interaction_log: InteractionLog, mock_scrape):
    mock_scrape.side_effect = RuntimeError("403 Forbidden")
    response = await client.post(
        "/analyze-company",
        json={"companyName": "Acme", "jobDescription": JOB_URL},
    )
    assert response.status_code == 400
    assert "copy and paste" in response.json()["message"]
    assert len(await interaction_log.list_plan_records()) == 1


async def test_analyze_missing_fields(client: AsyncClient, interaction_log: InteractionLog):
    for payload in (
        {"companyName": "Acme"},
        {"jobDescription": "some text"},
        {"companyName": "", "jobDescription": "some text"},
        {"companyName": "Acme", "jobDescription": "   "},
        {},
    ):
        response = await client.post("/analyze-company", json=payload)
        assert response.status_code == 400, payload
        assert response.json()["error"] == "Company name and job description are required"

    assert await interaction_log.list_plan_records() == []


async def test_analyze_invalid_body(client: AsyncClient, interaction_log: InteractionLog):
    response = await client.post(
        "/analyze-company", content=b"not json", headers={"content-type": "application/json"}
    )
    assert response.status_code == 400
    response = await client.post("/analyze-company", json={"companyName": 5, "jobDescription": "x"})
    assert response.status_code == 400
    assert await interaction_log.list_plan_records() == []


async def test_analyze_provider_failure(
    client: AsyncClient, interaction_log: InteractionLog, mock_fit_analyst, sample_jd_text
):
    mock_fit_analyst.analyze.side_effect = ProviderError("overloaded_error")
    response = await client.post(
        "/analyze-company",
        json={"companyName": "Acme", "jobDescription": sample_jd_text},
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to analyze company", "message": "overloaded_error"}

    records = await interaction_log.list_plan_records()
    assert len(records) == 1
    assert records[0].error == "overloaded_error"
    assert records[0].plan is None
    assert records[0].job_fit is None
    assert records[0].metadata is None


async def test_analyze_response_unaffected_by_store_failure(
    client: AsyncClient, services, sample_jd_text
):
    services.interaction_log = InteractionLog(None)
    response = await client.post(
        "/analyze-company",
        json={"companyName": "Acme", "jobDescription": sample_jd_text},
    )
    assert response.status_code == 200
    assert response.json()["plan"] == SAMPLE_PLAN


async def test_analyze_preflight_and_methods(client: AsyncClient):
    response = await client.options("/analyze-company")
    assert response.status_code == 200
    assert response.content == b""

    response = await client.get("/analyze-company")
    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}


# ============ Chatbot ============


async def test_chatbot_success(client: AsyncClient, interaction_log: InteractionLog, mock_persona):
    history = [
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello!"},
    ]
    response = await client.post(
        "/chatbot", json={"message": "What do you build?", "conversationHistory": history}
    )
    assert response.status_code == 200
    assert response.json() == {"response": "I mostly build web tools."}
    mock_persona.chat.assert_awaited_once_with("What do you build?", history)

    records = await interaction_log.list_chat_records()
    assert len(records) == 1
    assert records[0].message == "What do you build?"
    assert records[0].conversation_history_length == 2
    assert records[0].response == "I mostly build web tools."
    assert records[0].metadata["architecture"] == "persona-chat"
    assert records[0].metadata["model"] == "claude-haiku-4-5-20251001"


async def test_chatbot_missing_message(client: AsyncClient, interaction_log: InteractionLog):
    response = await client.post("/chatbot", json={"conversationHistory": []})
    assert response.status_code == 400
    assert response.json()["error"] == "Message is required"
    assert await interaction_log.list_chat_records() == []


async def test_chatbot_failure_logged(client: AsyncClient, interaction_log: InteractionLog, mock_persona):
    mock_persona.chat.side_effect = ProviderError("timeout")
    response = await client.post("/chatbot", json={"message": "hi"})
    assert response.status_code == 500
    assert response.json()["error"] == "Failed to process chat message"

    records = await interaction_log.list_chat_records()
    assert len(records) == 1
    assert records[0].error == "timeout"
    assert records[0].response is None
    assert records[0].conversation_history_length == 0


async def test_chatbot_method_not_allowed(client: AsyncClient):
    assert (await client.options("/chatbot")).status_code == 200
    assert (await client.put("/chatbot", json={})).status_code == 405


# ============ Admin logs ============


async def _seed(log: InteractionLog) -> None:
    await log.append_plan_record(
        PlanLogEntry(company_name="Acme", job_description="jd", plan="p", job_fit="f")
    )
    await log.append_chat_record(ChatLogEntry(message="hi", response="hey"))


async def test_admin_logs_plan_only(client: AsyncClient, interaction_log: InteractionLog):
    await _seed(interaction_log)
    response = await client.get("/admin-logs", params={"key": ADMIN_KEY, "type": "plan"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "planGenerator" in body["logs"]
    assert "chatbot" not in body["logs"]
    assert body["counts"] == {"planGenerator": 1, "chatbot": 0}
    assert "stats" not in body


async def test_admin_logs_all_with_stats_via_header(client: AsyncClient, interaction_log: InteractionLog):
    await _seed(interaction_log)
    response = await client.get(
        "/admin-logs", params={"stats": "true"}, headers={"x-admin-key": ADMIN_KEY}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["counts"] == {"planGenerator": 1, "chatbot": 1}
    assert body["stats"] == {"planGenerator": {"total": 1}, "chatbot": {"total": 1}}
    assert body["logs"]["chatbot"][0]["userInput"]["message"] == "hi"


async def test_admin_logs_bad_limit_uses_default(client: AsyncClient, interaction_log: InteractionLog):
    await _seed(interaction_log)
    response = await client.get("/admin-logs", params={"key": ADMIN_KEY, "limit": "lots"})
    assert response.status_code == 200
    assert response.json()["counts"]["planGenerator"] == 1


async def test_admin_logs_wrong_key(client: AsyncClient):
    for log_type in ("plan", "chatbot", "all"):
        response = await client.get("/admin-logs", params={"key": "wrong", "type": log_type})
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
    assert (await client.get("/admin-logs")).status_code == 401


async def test_admin_logs_unknown_type(client: AsyncClient):
    response = await client.get("/admin-logs", params={"key": ADMIN_KEY, "type": "everything"})
    assert response.status_code == 400


async def test_admin_logs_unconfigured(client: AsyncClient, services):
    services.admin.admin_key = None
    response = await client.get("/admin-logs", params={"key": "anything"})
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Server configuration error"
    assert "ADMIN_LOG_KEY" in body["message"]


async def test_admin_logs_post_not_allowed(client: AsyncClient):
    assert (await client.post("/admin-logs")).status_code == 405


async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.json() == {"status": "ok"}
