"""Tests for FastAPI endpoints -- form changes, analyses, SSE stream, history, CORS, health."""

import threading
import time
from dataclasses import asdict
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import pytest_asyncio
import uvicorn
from httpx import ASGITransport, AsyncClient

from plmcost import main
from plmcost.config.settings import Settings
from plmcost.history import HistoryLog, InMemoryStore
from plmcost.main import app
from plmcost.orchestrator import CostAnalysisOrchestrator
from plmcost.providers import NarrativeGenerationError
from plmcost.streaming import StreamManager


class _TestServer:
    """Runs the FastAPI app on a real server in a background thread."""

    def __init__(self, host: str = "127.0.0.1", port: int = 9876):
        self.host = host
        self.port = port
        self.base_url = f"http://{host}:{port}"
        self._server = None

    def start(self):
        config = uvicorn.Config(app, host=self.host, port=self.port, log_level="error")
        self._server = uvicorn.Server(config)
        thread = threading.Thread(target=self._server.run, daemon=True)
        thread.start()
        # Wait for server to be ready
        for _ in range(50):
            try:
                httpx.get(f"{self.base_url}/health", timeout=0.5)
                return
            except httpx.ConnectError:
                time.sleep(0.1)

    def stop(self):
        if self._server:
            self._server.should_exit = True


@pytest.fixture(scope="module")
def server():
    srv = _TestServer()
    srv.start()
    yield srv
    srv.stop()


@pytest.fixture
def provider(narrative_content):
    mock_provider = AsyncMock()
    mock_provider.generate = AsyncMock(return_value=narrative_content)
    return mock_provider


@pytest.fixture
def api_orchestrator(provider):
    """Swap the app's orchestrator for one with a mocked provider and in-memory history."""
    stream_manager = StreamManager()
    orchestrator = CostAnalysisOrchestrator(
        provider=provider,
        history=HistoryLog(InMemoryStore()),
        stream_manager=stream_manager,
        settings=Settings(),
    )
    with patch("plmcost.main.orchestrator", orchestrator), \
         patch("plmcost.main.stream_manager", stream_manager), \
         patch("plmcost.main._sessions", {}):
        yield orchestrator


@pytest_asyncio.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def form_payload(filled_form):
    payload = asdict(filled_form)
    payload["info_location"] = filled_form.info_location.value
    return payload


async def _create(client, form_payload) -> str:
    resp = await client.post("/api/analyses", json={"form": form_payload})
    assert resp.status_code == 200
    return resp.json()["analysis_id"]


class TestBasics:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_catalog(self, client):
        body = (await client.get("/api/catalog")).json()
        assert len(body["countries"]) == 11
        assert body["countries"][0]["code"] == "USD"
        assert {"value": "automotive", "label": "Automotive"} in body["industries"]
        assert "Engines" in body["sectors"]["automotive"]

    @pytest.mark.asyncio
    async def test_cors_allows_localhost_3000(self, client):
        """OPTIONS request with Origin: http://localhost:3000 is allowed."""
        resp = await client.options(
            "/api/analyses",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"


class TestFormChanges:
    @pytest.mark.asyncio
    async def test_industry_change(self, client):
        resp = await client.post(
            "/api/form/changes", json={"field": "industry_input", "value": "Automotive"}
        )
        assert resp.status_code == 200
        assert resp.json()["form"]["industry"] == "automotive"

    @pytest.mark.asyncio
    async def test_unknown_field(self, client):
        resp = await client.post("/api/form/changes", json={"field": "colour", "value": "red"})
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_bad_info_location(self, client):
        resp = await client.post(
            "/api/form/changes", json={"field": "info_location", "value": "cloud"}
        )
        assert resp.status_code == 422


class TestAnalyses:
    @pytest.mark.asyncio
    async def test_create_and_fetch(self, client, api_orchestrator, form_payload):
        analysis_id = await _create(client, form_payload)

        body = (await client.get(f"/api/analyses/{analysis_id}")).json()
        assert body["status"] == "completed"
        assert body["result"]["total_cost"] == 486_538
        assert body["override_state"] == "no_overrides"
        assert body["methodology"]["rationale"][2]["heading"] == "Purposely Conservative"
        assert body["charts"]["cost_data"] == [26_923, 75_000, 384_615]
        assert len(api_orchestrator.history.load()) == 1

    @pytest.mark.asyncio
    async def test_invalid_form(self, client, api_orchestrator, form_payload):
        form_payload["company_name"] = ""
        resp = await client.post("/api/analyses", json={"form": form_payload})
        assert resp.status_code == 422
        assert resp.json()["detail"] == ["Please enter a company name."]

    @pytest.mark.asyncio
    async def test_busy_orchestrator(self, client, api_orchestrator, form_payload):
        api_orchestrator.reserve()
        try:
            resp = await client.post("/api/analyses", json={"form": form_payload})
        finally:
            api_orchestrator.release()
        assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_unknown_analysis(self, client, api_orchestrator):
        assert (await client.get("/api/analyses/nope")).status_code == 404

    @pytest.mark.asyncio
    async def test_narrative_failure(self, client, api_orchestrator, provider, form_payload):
        provider.generate = AsyncMock(side_effect=NarrativeGenerationError("bad"))
        analysis_id = await _create(client, form_payload)

        body = (await client.get(f"/api/analyses/{analysis_id}")).json()
        assert body["status"] == "failed"
        assert body["result"] is None
        assert body["error"] == "There was an error generating the analysis. Please try again."
        assert (await client.get(f"/api/analyses/{analysis_id}/report.pdf")).status_code == 409
        assert not api_orchestrator.is_busy

    @pytest.mark.asyncio
    async def test_override_and_recalculate(self, client, api_orchestrator, form_payload):
        analysis_id = await _create(client, form_payload)

        resp = await client.post(
            f"/api/analyses/{analysis_id}/overrides",
            json={"metric_key": "averageEngineerSalary", "value": 100000},
        )
        assert resp.json() == {
            "overrides": {"averageEngineerSalary": 100000.0},
            "override_state": "partially_overridden",
        }

        resp = await client.post(f"/api/analyses/{analysis_id}/recalculate")
        assert resp.status_code == 200

        body = (await client.get(f"/api/analyses/{analysis_id}")).json()
        assert body["result"]["cost_breakdown"][0]["cost"] == 38_462
        assert body["methodology"]["rationale"][2]["heading"] == "Conservative and Real Values"

    @pytest.mark.asyncio
    async def test_rejected_override_keeps_state(self, client, api_orchestrator, form_payload):
        analysis_id = await _create(client, form_payload)
        resp = await client.post(
            f"/api/analyses/{analysis_id}/overrides",
            json={"metric_key": "reworkCost", "value": "abc"},
        )
        assert resp.json()["override_state"] == "no_overrides"

    @pytest.mark.asyncio
    async def test_pdf_report(self, client, api_orchestrator, form_payload):
        analysis_id = await _create(client, form_payload)
        resp = await client.get(f"/api/analyses/{analysis_id}/report.pdf")
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert resp.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_stream_replays_completed_run(self, client, api_orchestrator, form_payload):
        analysis_id = await _create(client, form_payload)
        resp = await client.get(f"/api/analyses/{analysis_id}/stream")
        assert resp.headers["content-type"].startswith("text/event-stream")
        assert "event: analysis_started" in resp.text
        assert resp.text.rstrip().split("\n")[-3] == "event: analysis_completed"

    @pytest.mark.asyncio
    async def test_oldest_sessions_evicted_past_cap(self, client, api_orchestrator, form_payload):
        with patch("plmcost.main.settings", Settings(max_sessions=2)):
            first = await _create(client, form_payload)
            second = await _create(client, form_payload)
            third = await _create(client, form_payload)

        assert (await client.get(f"/api/analyses/{first}")).status_code == 404
        assert main.stream_manager.buffered(first) == []
        for analysis_id in (second, third):
            body = (await client.get(f"/api/analyses/{analysis_id}")).json()
            assert body["status"] == "completed"
            assert main.stream_manager.buffered(analysis_id)
        assert len(main._sessions) == 2

    def test_stream_endpoint_returns_event_stream_content_type(self, server):
        """GET /api/analyses/{id}/stream returns text/event-stream content type."""
        with httpx.stream("GET", f"{server.base_url}/api/analyses/test-id/stream", timeout=5.0) as resp:
            assert resp.headers["content-type"] == "text/event-stream; charset=utf-8"


class TestHistory:
    @pytest.mark.asyncio
    async def test_list_export_and_clear(self, client, api_orchestrator, form_payload):
        await _create(client, form_payload)

        entries = (await client.get("/api/history")).json()["entries"]
        assert len(entries) == 1
        assert entries[0]["form_data"]["company_name"] == "Acme Machines"

        resp = await client.get("/api/history/export.csv")
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.content.startswith(b"\xef\xbb\xbf")
        assert "Acme Machines" in resp.text

        assert (await client.delete("/api/history")).json() == {"status": "cleared"}
        assert (await client.get("/api/history")).json()["entries"] == []
