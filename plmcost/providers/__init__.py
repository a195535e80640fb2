from .base import NarrativeGenerationError, NarrativeProvider, decorate
from .claude_narrative import ClaudeNarrativeProvider, parse_narrative, strip_code_fences

__all__ = [
    "NarrativeGenerationError",
    "NarrativeProvider",
    "decorate",
    "ClaudeNarrativeProvider",
    "parse_narrative",
    "strip_code_fences",
]
