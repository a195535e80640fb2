"""SSE event types and serialization for cost analyses."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class AnalysisEventType(str, Enum):
    """All event types emitted while an analysis runs."""

    # Analysis lifecycle
    ANALYSIS_STARTED = "analysis_started"
    ANALYSIS_COMPLETED = "analysis_completed"
    ANALYSIS_ERROR = "analysis_error"

    # Deterministic stages
    METRICS_RESOLVED = "metrics_resolved"
    CALCULATION_COMPLETED = "calculation_completed"

    # Narrative generation
    NARRATIVE_STARTED = "narrative_started"
    NARRATIVE_COMPLETED = "narrative_completed"

    # Overrides and recalculation
    OVERRIDE_APPLIED = "override_applied"
    OVERRIDE_REJECTED = "override_rejected"
    RECALCULATION_STARTED = "recalculation_started"

    HISTORY_SAVED = "history_saved"


# A stream ends after one of these
TERMINAL_EVENTS = frozenset(
    {AnalysisEventType.ANALYSIS_COMPLETED, AnalysisEventType.ANALYSIS_ERROR}
)


@dataclass
class SSEEvent:
    """A single Server-Sent Event ready for wire serialization."""

    event_type: AnalysisEventType
    data: dict[str, Any]
    sequence_id: int
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))

    @property
    def is_terminal(self) -> bool:
        return self.event_type in TERMINAL_EVENTS

    def to_sse_string(self) -> str:
        """Serialize to SSE wire format (event, data, id, blank line)."""
        payload = {
            **self.data,
            "timestamp": self.timestamp.isoformat(),
        }
        data_json = json.dumps(payload, default=str)
        return f"event: {self.event_type.value}\ndata: {data_json}\nid: {self.sequence_id}\n\n"
