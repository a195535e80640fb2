from .events import AnalysisEventType, SSEEvent
from .manager import StreamManager

__all__ = ["AnalysisEventType", "SSEEvent", "StreamManager"]
