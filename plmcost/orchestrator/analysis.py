"""CostAnalysisOrchestrator: runs one hidden-cost analysis end to end.

Pipeline: form -> resolve metrics -> calculate -> assemble breakdown ->
narrative provider -> history. Only the narrative step is async, and at
most one analysis runs at a time per orchestrator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from plmcost.catalog.countries import Country, get_country
from plmcost.catalog.schema import MetricCatalog
from plmcost.config.settings import Settings
from plmcost.engine.calculator import CostCalculator
from plmcost.engine.narrative import build_result
from plmcost.engine.overrides import MetricOverrides
from plmcost.engine.resolver import ResolvedMetrics, resolve
from plmcost.engine.result import CalculationResult
from plmcost.forms.state import FormState, industry_label, sector_label, to_counts
from plmcost.history.log import HistoryLog
from plmcost.models.inputs import OperationalCounts
from plmcost.models.narrative import NarrativeContext
from plmcost.providers.base import NarrativeProvider, decorate
from plmcost.providers.claude_narrative import ClaudeNarrativeProvider
from plmcost.streaming.events import AnalysisEventType, SSEEvent
from plmcost.streaming.manager import StreamManager

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "There was an error generating the analysis. Please try again."


class AnalysisInProgressError(RuntimeError):
    """Another analysis is already running on this orchestrator."""


class AnalysisStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class AnalysisSession:
    """Form, overrides and latest result for one analysis."""

    analysis_id: str
    form: FormState
    overrides: MetricOverrides = field(default_factory=MetricOverrides)
    status: AnalysisStatus = AnalysisStatus.PENDING
    result: Optional[CalculationResult] = None
    counts: Optional[OperationalCounts] = None
    resolved: Optional[ResolvedMetrics] = None
    error: Optional[str] = None
    history_entry_id: Optional[int] = None

    @property
    def country(self) -> Country:
        country = get_country(self.form.country_code)
        if country is None:
            raise ValueError(f"Unknown country code: {self.form.country_code}")
        return country


class CostAnalysisOrchestrator:
    """Runs analyses and recalculations, emitting progress events."""

    def __init__(
        self,
        provider: Optional[NarrativeProvider] = None,
        history: Optional[HistoryLog] = None,
        stream_manager: Optional[StreamManager] = None,
        catalog: Optional[MetricCatalog] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or Settings()
        self._provider = provider or ClaudeNarrativeProvider(settings=self._settings)
        self._history = history if history is not None else HistoryLog(
            limit=self._settings.history_limit
        )
        self._stream_manager = stream_manager
        self._catalog = catalog
        self._calculator = CostCalculator()
        self._busy = False
        self._sequences: dict[str, int] = {}

    @property
    def history(self) -> HistoryLog:
        return self._history

    @property
    def is_busy(self) -> bool:
        return self._busy

    # ------------------------------------------------------------------
    # Single-flight guard
    # ------------------------------------------------------------------

    def reserve(self) -> None:
        """Claim the orchestrator for one run.

        Raises AnalysisInProgressError when a run is already in flight.
        """
        if self._busy:
            raise AnalysisInProgressError("An analysis is already in progress")
        self._busy = True

    def release(self) -> None:
        self._busy = False

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def new_session(self, form: FormState, analysis_id: Optional[str] = None) -> AnalysisSession:
        """Validate the form and open a session with no overrides.

        Raises InputValidationError before anything is calculated.
        """
        counts = to_counts(form)
        return AnalysisSession(
            analysis_id=analysis_id or str(uuid4()),
            form=form,
            counts=counts,
        )

    async def submit(self, form: FormState, analysis_id: Optional[str] = None) -> AnalysisSession:
        """Validate, calculate and narrate a fresh analysis."""
        session = self.new_session(form, analysis_id)
        self.reserve()
        await self.run_reserved(session)
        return session

    async def recalculate(self, session: AnalysisSession) -> AnalysisSession:
        """Re-run the calculation for a session with its current overrides."""
        self.reserve()
        await self.run_reserved(session, recalculation=True)
        return session

    async def run_reserved(self, session: AnalysisSession, recalculation: bool = False) -> None:
        """Run an analysis on an orchestrator already claimed with reserve()."""
        try:
            await self._execute(session, recalculation)
        finally:
            self.release()

    async def apply_override(
        self, session: AnalysisSession, metric_key: str, raw: Any
    ) -> MetricOverrides:
        """Apply one override edit to the session.

        Rejected input leaves the overrides unchanged and emits
        override_rejected instead of raising.
        """
        before = session.overrides
        after = before.apply(metric_key, raw)
        rejected = after is before and not (
            raw is None or (isinstance(raw, str) and raw.strip() == "")
        )
        session.overrides = after

        event_type = (
            AnalysisEventType.OVERRIDE_REJECTED if rejected else AnalysisEventType.OVERRIDE_APPLIED
        )
        await self._emit(session.analysis_id, event_type, {
            "metric_key": metric_key,
            "value": raw,
            "overrides": after.as_dict(),
            "override_state": after.state.value,
        })
        return after

    def forget(self, analysis_id: str) -> None:
        """Drop the event sequence and stream state kept for an analysis."""
        self._sequences.pop(analysis_id, None)
        if self._stream_manager is not None:
            self._stream_manager.drop(analysis_id)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _execute(self, session: AnalysisSession, recalculation: bool) -> None:
        analysis_id = session.analysis_id
        form = session.form
        if session.counts is None:
            session.counts = to_counts(form)
        if not recalculation:
            session.overrides = MetricOverrides()
            session.result = None
        # Edits made while this run is in flight apply to the next recalculation
        overrides = session.overrides

        session.status = AnalysisStatus.RUNNING
        session.error = None
        if self._stream_manager is not None:
            self._stream_manager.clear_buffer(analysis_id)

        start_event = (
            AnalysisEventType.RECALCULATION_STARTED if recalculation
            else AnalysisEventType.ANALYSIS_STARTED
        )
        await self._emit(analysis_id, start_event, {
            "analysis_id": analysis_id,
            "company_name": form.company_name,
            "industry": form.industry,
            "overrides": overrides.as_dict(),
        })

        try:
            country = session.country
            resolved = resolve(
                form.industry,
                form.sector,
                form.country_code,
                overrides,
                catalog=self._catalog,
            )
            await self._emit(analysis_id, AnalysisEventType.METRICS_RESOLVED, {
                "industry_key": resolved.industry_key,
                "sector_key": resolved.sector_key,
                "currency_code": resolved.currency_code,
                "overridden": sorted(k.value for k in resolved.overridden),
            })

            components = self._calculator.calculate(resolved, session.counts, form.info_location)
            numeric = build_result(resolved, session.counts, components, form.info_location, country)
            await self._emit(analysis_id, AnalysisEventType.CALCULATION_COMPLETED, {
                "total_cost": numeric.total_cost,
                "costs": numeric.component_costs(),
                "wasted_hours": components.wasted_hours,
            })

            await self._emit(analysis_id, AnalysisEventType.NARRATIVE_STARTED, {})
            context = NarrativeContext(
                company_name=form.company_name,
                industry=industry_label(form),
                sector=sector_label(form),
                country=country,
                engineers=session.counts.engineers,
                num_sites=session.counts.num_sites,
                num_countries=session.counts.num_countries,
                info_location=form.info_location,
            )
            content = await self._provider.generate(context, numeric)
            result = decorate(numeric, content)
            await self._emit(analysis_id, AnalysisEventType.NARRATIVE_COMPLETED, {
                "summary": result.summary,
            })
        except Exception:
            # The numbers from this attempt are discarded with it
            logger.exception(f"Analysis {analysis_id} failed")
            session.status = AnalysisStatus.FAILED
            session.error = GENERIC_FAILURE_MESSAGE
            await self._emit(analysis_id, AnalysisEventType.ANALYSIS_ERROR, {
                "analysis_id": analysis_id,
                "error": GENERIC_FAILURE_MESSAGE,
            })
            raise

        session.resolved = resolved
        session.result = result
        session.status = AnalysisStatus.COMPLETED

        entry = self._history.record(
            form_data=form,
            result=result,
            country=country,
            metric_overrides=overrides.as_dict(),
        )
        session.history_entry_id = entry.id
        await self._emit(analysis_id, AnalysisEventType.HISTORY_SAVED, {"entry_id": entry.id})

        await self._emit(analysis_id, AnalysisEventType.ANALYSIS_COMPLETED, {
            "analysis_id": analysis_id,
            "status": AnalysisStatus.COMPLETED.value,
            "total_cost": result.total_cost,
            "override_state": overrides.state.value,
        })
        logger.info(
            f"Analysis {analysis_id} completed: total {result.total_cost} {form.country_code}"
        )

    async def _emit(self, analysis_id: str, event_type: AnalysisEventType, data: dict) -> None:
        if self._stream_manager is None:
            return
        seq = self._sequences.get(analysis_id, 0) + 1
        self._sequences[analysis_id] = seq
        await self._stream_manager.emit(
            analysis_id,
            SSEEvent(event_type=event_type, data=data, sequence_id=seq),
        )
