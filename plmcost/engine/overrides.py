"""User-supplied replacements for the monetary catalog metrics."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from plmcost.models.enums import OVERRIDABLE_METRICS, MetricKey, OverrideState

logger = logging.getLogger(__name__)


def is_valid_override(value: Any) -> bool:
    """True for a finite, non-negative real number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


def parse_override_value(raw: Any) -> Optional[float]:
    """Parse raw user input into an override amount, or None if unusable."""
    if isinstance(raw, str):
        raw = raw.strip()
    if isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if is_valid_override(value) else None


@dataclass(frozen=True)
class MetricOverrides:
    """Immutable set of overrides; every edit returns a new instance.

    Transitions between NO_OVERRIDES, PARTIALLY_OVERRIDDEN and
    FULLY_OVERRIDDEN follow from how many of the three monetary metrics
    are set.
    """

    values: Mapping[MetricKey, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        cleaned: dict[MetricKey, float] = {}
        for key, value in self.values.items():
            metric_key = MetricKey(key)
            if metric_key not in OVERRIDABLE_METRICS:
                raise ValueError(f"{metric_key.value} cannot be overridden")
            if not is_valid_override(value):
                raise ValueError(
                    f"Override for {metric_key.value} must be a non-negative number, got {value!r}"
                )
            cleaned[metric_key] = float(value)
        object.__setattr__(self, "values", cleaned)

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, float]]) -> MetricOverrides:
        return cls(dict(raw or {}))

    def as_dict(self) -> dict[str, float]:
        return {key.value: value for key, value in self.values.items()}

    def get(self, metric_key: MetricKey | str) -> Optional[float]:
        return self.values.get(MetricKey(metric_key))

    def __contains__(self, metric_key: object) -> bool:
        try:
            return MetricKey(metric_key) in self.values
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self.values)

    @property
    def state(self) -> OverrideState:
        if not self.values:
            return OverrideState.NO_OVERRIDES
        if len(self.values) == len(OVERRIDABLE_METRICS):
            return OverrideState.FULLY_OVERRIDDEN
        return OverrideState.PARTIALLY_OVERRIDDEN

    def apply(self, metric_key: MetricKey | str, raw: Any) -> MetricOverrides:
        """Apply one edit from the user.

        Blank input clears the key. Non-numeric or negative input is
        rejected and the current overrides are returned unchanged.
        """
        try:
            key = MetricKey(metric_key)
        except ValueError:
            logger.debug(f"Ignoring override for unknown metric {metric_key!r}")
            return self
        if key not in OVERRIDABLE_METRICS:
            logger.debug(f"Ignoring override for non-editable metric {key.value}")
            return self

        if raw is None or (isinstance(raw, str) and raw.strip() == ""):
            return self.clear(key)

        value = parse_override_value(raw)
        if value is None:
            logger.debug(f"Rejected override {raw!r} for {key.value}")
            return self

        updated = dict(self.values)
        updated[key] = value
        return MetricOverrides(updated)

    def clear(self, metric_key: MetricKey | str) -> MetricOverrides:
        key = MetricKey(metric_key)
        if key not in self.values:
            return self
        updated = {k: v for k, v in self.values.items() if k != key}
        return MetricOverrides(updated)
