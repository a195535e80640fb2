from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from plmcost.models.enums import CostComponent, MetricKey

# Global registry -- maps component id -> CostComponentDefinition
_REGISTRY: dict[CostComponent, CostComponentDefinition] = {}


@dataclass(frozen=True)
class CostComponentDefinition:
    """A hidden-cost component of the breakdown."""

    id: CostComponent
    category: str
    description: str
    metric_key: MetricKey  # Metric reported alongside the cost
    metric_label: str
    formula_fn: Callable[..., float]
    position: int  # Place in the breakdown, starting at 0


def register_component(
    component_id: CostComponent,
    category: str,
    description: str,
    metric_key: MetricKey,
    metric_label: str,
    position: int,
) -> Callable:
    """Decorator to register a formula function as a breakdown component."""

    def decorator(fn: Callable[..., float]) -> Callable[..., float]:
        definition = CostComponentDefinition(
            id=component_id,
            category=category,
            description=description,
            metric_key=metric_key,
            metric_label=metric_label,
            formula_fn=fn,
            position=position,
        )
        _REGISTRY[component_id] = definition
        return fn

    return decorator


def get_component(component_id: CostComponent) -> Optional[CostComponentDefinition]:
    """Look up a component definition by ID."""
    return _REGISTRY.get(component_id)


def get_all_components() -> list[CostComponentDefinition]:
    """Return every registered component in breakdown order."""
    return sorted(_REGISTRY.values(), key=lambda d: d.position)
