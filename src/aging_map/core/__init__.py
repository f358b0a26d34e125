"""Core module containing metrics export for aging maps."""

from aging_map.core.metrics import AgingMapCollector, register_map_metrics

__all__ = [
    "AgingMapCollector",
    "register_map_metrics",
]
