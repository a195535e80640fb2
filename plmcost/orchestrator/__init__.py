from .analysis import (
    AnalysisInProgressError,
    AnalysisSession,
    AnalysisStatus,
    CostAnalysisOrchestrator,
)

__all__ = [
    "AnalysisInProgressError",
    "AnalysisSession",
    "AnalysisStatus",
    "CostAnalysisOrchestrator",
]
