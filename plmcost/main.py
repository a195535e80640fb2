"""FastAPI application for the PLM hidden-cost calculator: REST endpoints and SSE streaming."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Optional, Union
from uuid import uuid4

from fastapi import BackgroundTasks, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from plmcost.catalog.countries import COUNTRIES
from plmcost.catalog.industries import INDUSTRY_OPTIONS, SECTORS
from plmcost.config.settings import Settings
from plmcost.engine.charts import build_chart_data
from plmcost.engine.narrative import metric_summary, methodology_variant, operational_summary
from plmcost.exporters import build_report_pdf, export_history_csv
from plmcost.forms.state import FormState, InputValidationError, apply_field_change
from plmcost.history.log import HistoryLog
from plmcost.history.store import FileStore
from plmcost.orchestrator import (
    AnalysisInProgressError,
    AnalysisSession,
    AnalysisStatus,
    CostAnalysisOrchestrator,
)
from plmcost.streaming import StreamManager

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = Settings()

app = FastAPI(title="PLM Hidden-Cost API", version="0.1.0")

# CORS: allow the web front end
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Singleton stream manager and orchestrator
stream_manager = StreamManager()
orchestrator = CostAnalysisOrchestrator(
    history=HistoryLog(FileStore(settings.history_dir), limit=settings.history_limit),
    stream_manager=stream_manager,
    settings=settings,
)

# In-memory analysis sessions
_sessions: dict[str, AnalysisSession] = {}


class FormChangeRequest(BaseModel):
    form: FormState = Field(default_factory=FormState)
    field: str
    value: str


class CreateAnalysisRequest(BaseModel):
    form: FormState


class CreateAnalysisResponse(BaseModel):
    analysis_id: str
    status: str


class OverrideRequest(BaseModel):
    metric_key: str
    value: Optional[Union[float, str]] = None


def _get_session(analysis_id: str) -> AnalysisSession:
    session = _sessions.get(analysis_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Analysis not found")
    return session


def _remember_session(session: AnalysisSession) -> None:
    """Store a session, evicting the oldest ones past the configured cap."""
    _sessions[session.analysis_id] = session
    while len(_sessions) > max(settings.max_sessions, 1):
        oldest = next(iter(_sessions))
        del _sessions[oldest]
        orchestrator.forget(oldest)
        logger.info(f"Evicted analysis session {oldest}")


def _session_payload(session: AnalysisSession) -> dict:
    payload = {
        "analysis_id": session.analysis_id,
        "status": session.status.value,
        "error": session.error,
        "form": asdict(session.form),
        "overrides": session.overrides.as_dict(),
        "override_state": session.overrides.state.value,
        "result": asdict(session.result) if session.result is not None else None,
        "history_entry_id": session.history_entry_id,
    }
    if session.result is not None and session.resolved is not None:
        country = session.country
        payload["methodology"] = {
            "metrics": [asdict(line) for line in metric_summary(session.resolved, country)],
            "operational": [
                {"label": label, "value": value}
                for label, value in operational_summary(session.resolved)
            ],
            "rationale": [
                {"heading": heading, "text": text}
                for heading, text in methodology_variant(session.overrides.state)
            ],
        }
        payload["charts"] = asdict(build_chart_data(session.result, session.counts))
    return payload


async def run_analysis(analysis_id: str, recalculation: bool = False):
    """Background task: run a reserved analysis; events go out over SSE."""
    session = _sessions[analysis_id]
    try:
        await orchestrator.run_reserved(session, recalculation=recalculation)
    except Exception as e:
        # Already logged and recorded on the session by the orchestrator
        logger.warning(f"Analysis {analysis_id} ended with error: {e}")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/catalog")
async def get_catalog():
    """Countries, industry options and sector lists for the form."""
    return {
        "countries": [asdict(country) for country in COUNTRIES],
        "industries": [option._asdict() for option in INDUSTRY_OPTIONS],
        "sectors": {key: list(names) for key, names in SECTORS.items()},
    }


@app.post("/api/form/changes")
async def change_form_field(body: FormChangeRequest):
    """Apply one field edit and return the resulting form state."""
    try:
        updated = apply_field_change(body.form, body.field, body.value)
    except KeyError as e:
        raise HTTPException(status_code=400, detail=str(e.args[0]))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"form": asdict(updated)}


@app.post("/api/analyses", response_model=CreateAnalysisResponse)
async def create_analysis(body: CreateAnalysisRequest, background_tasks: BackgroundTasks):
    """Validate the form and start a new analysis."""
    try:
        session = orchestrator.new_session(body.form, analysis_id=str(uuid4()))
    except InputValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    try:
        orchestrator.reserve()
    except AnalysisInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))

    _remember_session(session)
    # Run in background so the SSE stream can pick up events
    background_tasks.add_task(run_analysis, session.analysis_id)
    return CreateAnalysisResponse(analysis_id=session.analysis_id, status="started")


@app.get("/api/analyses/{analysis_id}")
async def get_analysis(analysis_id: str):
    """Return the analysis state and result (polling fallback)."""
    return _session_payload(_get_session(analysis_id))


@app.get("/api/analyses/{analysis_id}/stream")
async def stream_analysis(analysis_id: str, request: Request):
    """SSE endpoint: streams analysis progress events."""
    last_event_id: int | None = None
    raw = request.headers.get("Last-Event-ID")
    if raw is not None:
        try:
            last_event_id = int(raw)
        except ValueError:
            logger.debug(f"Ignoring malformed Last-Event-ID {raw!r}")

    generator = stream_manager.event_generator(analysis_id, last_event_id=last_event_id)
    return StreamingResponse(generator, media_type="text/event-stream")


@app.post("/api/analyses/{analysis_id}/overrides")
async def set_override(analysis_id: str, body: OverrideRequest):
    """Set or clear one metric override. Invalid values leave overrides unchanged."""
    session = _get_session(analysis_id)
    overrides = await orchestrator.apply_override(session, body.metric_key, body.value)
    return {
        "overrides": overrides.as_dict(),
        "override_state": overrides.state.value,
    }


@app.post("/api/analyses/{analysis_id}/recalculate", response_model=CreateAnalysisResponse)
async def recalculate_analysis(analysis_id: str, background_tasks: BackgroundTasks):
    """Re-run the calculation with the session's current overrides."""
    session = _get_session(analysis_id)
    try:
        orchestrator.reserve()
    except AnalysisInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))

    background_tasks.add_task(run_analysis, session.analysis_id, True)
    return CreateAnalysisResponse(analysis_id=session.analysis_id, status="started")


@app.get("/api/analyses/{analysis_id}/report.pdf")
async def download_report(analysis_id: str):
    session = _get_session(analysis_id)
    if session.status != AnalysisStatus.COMPLETED or session.result is None:
        raise HTTPException(status_code=409, detail="Analysis has no completed result")
    pdf = build_report_pdf(session.result, session.form, session.country)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="hidden_cost_analysis_plm.pdf"'},
    )


@app.get("/api/history")
async def list_history():
    return {"entries": [asdict(entry) for entry in orchestrator.history.load()]}


@app.delete("/api/history")
async def clear_history():
    orchestrator.history.clear()
    return {"status": "cleared"}


@app.get("/api/history/export.csv")
async def export_history():
    content = export_history_csv(orchestrator.history.load())
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="cost_analysis_history.csv"'},
    )
