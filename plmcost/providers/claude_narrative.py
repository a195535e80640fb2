"""Claude-backed narrative provider.

Sends the fixed calculation results to Claude through the Agent SDK and
parses the JSON prose it returns. No tools are exposed to the model.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Optional

from claude_agent_sdk import (
    AssistantMessage,
    ClaudeAgentOptions,
    ClaudeSDKClient,
    TextBlock,
)
from pydantic import ValidationError

from plmcost.config.settings import Settings
from plmcost.engine.result import CalculationResult
from plmcost.models.narrative import NarrativeContent, NarrativeContext
from plmcost.prompts.narrative_system import SYSTEM_PROMPT, format_narrative_prompt

from .base import NarrativeGenerationError, NarrativeProvider

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    return _CODE_FENCE.sub("", text.strip()).strip()


def parse_narrative(text: str) -> NarrativeContent:
    """Parse the model reply into NarrativeContent.

    Raises NarrativeGenerationError for non-JSON or wrongly shaped replies.
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise NarrativeGenerationError("Narrative reply was empty")
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise NarrativeGenerationError(f"Narrative reply is not valid JSON: {e}") from e
    try:
        return NarrativeContent.model_validate(payload)
    except ValidationError as e:
        raise NarrativeGenerationError(f"Narrative reply has the wrong shape: {e}") from e


class ClaudeNarrativeProvider(NarrativeProvider):
    """Generates the consultant narrative with a single Claude turn."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or Settings()

    def _options(self) -> ClaudeAgentOptions:
        env = {}
        if self._settings.anthropic_api_key:
            env["ANTHROPIC_API_KEY"] = self._settings.anthropic_api_key
        return ClaudeAgentOptions(
            system_prompt=SYSTEM_PROMPT,
            allowed_tools=[],
            max_turns=1,
            model=self._settings.narrative_model or None,
            env=env,
        )

    async def generate(
        self, context: NarrativeContext, result: CalculationResult
    ) -> NarrativeContent:
        prompt = format_narrative_prompt(context, result)
        chunks: list[str] = []

        try:
            async with ClaudeSDKClient(self._options()) as client:
                await client.query(prompt)
                async for msg in client.receive_response():
                    if isinstance(msg, AssistantMessage):
                        for block in msg.content:
                            if isinstance(block, TextBlock):
                                chunks.append(block.text)
        except Exception as e:
            logger.error(f"Narrative request failed for {context.company_name}: {e}")
            raise NarrativeGenerationError("Narrative request failed") from e

        content = parse_narrative("".join(chunks))
        logger.info(f"Narrative generated for {context.company_name}")
        return content
