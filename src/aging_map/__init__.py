"""Thread-safe dictionary with a container-wide time-to-live."""

from aging_map.cache import AgingMap, ExpirySweeper, MapStatistics
from aging_map.utils.exceptions import AgingMapError, ConfigError, InvalidTTLError

__version__ = "1.0.0"

__all__ = [
    "AgingMap",
    "ExpirySweeper",
    "MapStatistics",
    "AgingMapError",
    "ConfigError",
    "InvalidTTLError",
]
