"""Cache module providing the TTL-bounded aging map."""

from .aging_map import AgingMap, MapStatistics
from .sweeper import ExpirySweeper

__all__ = ['AgingMap', 'MapStatistics', 'ExpirySweeper']
