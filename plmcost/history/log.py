"""Bounded, persisted log of completed analyses (newest first)."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from pydantic import TypeAdapter

from plmcost.catalog.countries import Country
from plmcost.engine.result import CalculationResult
from plmcost.forms.state import FormState

from .store import InMemoryStore, KeyValueStore

logger = logging.getLogger(__name__)

HISTORY_KEY = "plmCalculatorHistory"
HISTORY_LIMIT = 10


@dataclass(frozen=True)
class HistoryEntry:
    id: int
    form_data: FormState
    result: CalculationResult
    country: Country
    metric_overrides: dict[str, float] = field(default_factory=dict)


_ENTRIES = TypeAdapter(list[HistoryEntry])


def dump_entries(entries: list[HistoryEntry]) -> str:
    return _ENTRIES.dump_json(entries).decode("utf-8")


def load_entries(raw: str) -> list[HistoryEntry]:
    return _ENTRIES.validate_json(raw)


class HistoryLog:
    """History of successful analyses kept in a key-value store.

    Storage failures never propagate: they are logged and the log
    behaves as empty (on read) or unchanged (on write).
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        limit: int = HISTORY_LIMIT,
        key: str = HISTORY_KEY,
    ):
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self._store = store if store is not None else InMemoryStore()
        self._limit = limit
        self._key = key

    @property
    def limit(self) -> int:
        return self._limit

    def load(self) -> list[HistoryEntry]:
        try:
            raw = self._store.get(self._key)
            if raw is None:
                return []
            return load_entries(raw)[: self._limit]
        except (OSError, ValueError):
            logger.exception("Failed to load analysis history")
            return []

    def get(self, entry_id: int) -> Optional[HistoryEntry]:
        for entry in self.load():
            if entry.id == entry_id:
                return entry
        return None

    def next_id(self, entries: Optional[list[HistoryEntry]] = None) -> int:
        """Millisecond timestamp, bumped past the newest entry when needed."""
        entries = self.load() if entries is None else entries
        now = int(time.time() * 1000)
        if entries and entries[0].id >= now:
            return entries[0].id + 1
        return now

    def record(
        self,
        form_data: FormState,
        result: CalculationResult,
        country: Country,
        metric_overrides: Optional[dict[str, float]] = None,
    ) -> HistoryEntry:
        entries = self.load()
        entry = HistoryEntry(
            id=self.next_id(entries),
            form_data=form_data,
            result=result,
            country=country,
            metric_overrides=dict(metric_overrides or {}),
        )
        self._save([entry] + entries)
        return entry

    def append(self, entry: HistoryEntry) -> list[HistoryEntry]:
        entries = ([entry] + self.load())[: self._limit]
        self._save(entries)
        return entries

    def clear(self) -> None:
        try:
            self._store.delete(self._key)
        except OSError:
            logger.exception("Failed to clear analysis history")

    def _save(self, entries: list[HistoryEntry]) -> None:
        entries = entries[: self._limit]
        try:
            self._store.set(self._key, dump_entries(entries))
            logger.info(f"History saved ({len(entries)} entries)")
        except (OSError, ValueError):
            logger.exception("Failed to save analysis history")
