"""StreamManager: per-analysis event buffering and SSE subscriber management."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import AsyncGenerator

from .events import SSEEvent

logger = logging.getLogger(__name__)


class StreamManager:
    """Distributes SSE events for analyses.

    Each analysis_id has a list of subscriber queues and a buffer of every
    emitted event, replayed to late or reconnecting subscribers.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[asyncio.Queue[SSEEvent]]] = defaultdict(list)
        self._buffers: dict[str, list[SSEEvent]] = defaultdict(list)

    async def subscribe(self, analysis_id: str) -> asyncio.Queue[SSEEvent]:
        queue: asyncio.Queue[SSEEvent] = asyncio.Queue()
        self._subscribers[analysis_id].append(queue)
        return queue

    async def unsubscribe(self, analysis_id: str, queue: asyncio.Queue[SSEEvent]) -> None:
        subs = self._subscribers.get(analysis_id, [])
        if queue in subs:
            subs.remove(queue)

    async def emit(self, analysis_id: str, event: SSEEvent) -> None:
        """Broadcast an event to all subscribers and buffer it for replay."""
        self._buffers[analysis_id].append(event)
        for queue in self._subscribers[analysis_id]:
            await queue.put(event)

    def buffered(self, analysis_id: str) -> list[SSEEvent]:
        return list(self._buffers.get(analysis_id, []))

    def clear_buffer(self, analysis_id: str) -> None:
        """Start a new run for an analysis; live subscribers stay attached."""
        self._buffers.pop(analysis_id, None)

    def drop(self, analysis_id: str) -> None:
        """Forget buffered events and subscribers for an analysis."""
        self._buffers.pop(analysis_id, None)
        self._subscribers.pop(analysis_id, None)
        logger.debug(f"Dropped event stream for {analysis_id}")

    async def event_generator(
        self, analysis_id: str, last_event_id: int | None = None
    ) -> AsyncGenerator[str, None]:
        """Async generator yielding SSE strings for an analysis.

        Buffered events with sequence_id > last_event_id (all of them when
        None) are replayed first, then live events follow. The generator
        finishes after a terminal event.
        """
        queue = await self.subscribe(analysis_id)
        try:
            # SSE comment as connection heartbeat (ignored by browsers)
            yield ": connected\n\n"

            replay_after = last_event_id if last_event_id is not None else 0
            last_sent = replay_after
            for event in self.buffered(analysis_id):
                if event.sequence_id > replay_after:
                    yield event.to_sse_string()
                    last_sent = event.sequence_id
                    if event.is_terminal:
                        return

            while True:
                event = await queue.get()
                # Already delivered during replay
                if event.sequence_id <= last_sent:
                    continue
                yield event.to_sse_string()
                last_sent = event.sequence_id
                if event.is_terminal:
                    return
        finally:
            await self.unsubscribe(analysis_id, queue)
