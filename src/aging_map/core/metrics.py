"""Prometheus export of aging map statistics."""

import logging
from typing import Iterator, Optional

from prometheus_client import REGISTRY, CollectorRegistry
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

from aging_map.cache.aging_map import AgingMap

logger = logging.getLogger(__name__)

_COUNTERS = {
    "hits": "Reads that returned a live value",
    "misses": "Reads that found no live value",
    "expired": "Entries evicted because an access found them expired",
    "purged": "Entries removed by an explicit purge or sweep",
    "removals": "Entries removed explicitly by the caller",
}


class AgingMapCollector(Collector):
    """Collects a map's statistics at scrape time.

    Reading the stats purges expired entries first, so the exported entry
    count never includes expired entries.
    """

    def __init__(self, aging_map: AgingMap, name: str) -> None:
        self.aging_map = aging_map
        self.name = name

    def describe(self) -> Iterator[Metric]:
        # Empty so several maps can register collectors on one registry.
        return iter(())

    def collect(self) -> Iterator[Metric]:
        stats = self.aging_map.stats()

        entries = GaugeMetricFamily(
            "aging_map_entries", "Live entries held by the map", labels=["map"]
        )
        entries.add_metric([self.name], stats["size"])
        yield entries

        ttl = GaugeMetricFamily(
            "aging_map_ttl_seconds", "Time-to-live applied to every entry", labels=["map"]
        )
        ttl.add_metric([self.name], stats["ttl"])
        yield ttl

        for key, documentation in _COUNTERS.items():
            counter = CounterMetricFamily(f"aging_map_{key}", documentation, labels=["map"])
            counter.add_metric([self.name], stats[key])
            yield counter


def register_map_metrics(
    aging_map: AgingMap,
    name: str,
    registry: Optional[CollectorRegistry] = None,
) -> AgingMapCollector:
    """Register a collector for ``aging_map`` and return it."""
    collector = AgingMapCollector(aging_map, name)
    (registry if registry is not None else REGISTRY).register(collector)
    logger.debug("Registered metrics for aging map '%s'", name)
    return collector
