import json
import math
from dataclasses import dataclass, field
from typing import Optional

from aging_map.cache.aging_map import AgingMap
from aging_map.cache.sweeper import is_valid_interval
from aging_map.utils.exceptions import ConfigError, InvalidTTLError


@dataclass
class MapConfig:
    ttl_seconds: float = 60.0
    sweep_interval: Optional[float] = None


@dataclass
class BenchConfig:
    threads: int = 8
    operations: int = 10000
    keys: int = 64


@dataclass
class AppConfig:
    map: MapConfig = field(default_factory=MapConfig)
    bench: BenchConfig = field(default_factory=BenchConfig)
    logging_config: str = "config/logging.yaml"


def _validate(config: AppConfig) -> None:
    ttl = config.map.ttl_seconds
    if isinstance(ttl, bool) or not isinstance(ttl, (int, float)) or math.isnan(ttl) or ttl < 0:
        raise ConfigError(f"map.ttl_seconds must be a non-negative number, got {ttl!r}")

    interval = config.map.sweep_interval
    if interval is not None and not is_valid_interval(interval):
        raise ConfigError(f"map.sweep_interval must be positive when set, got {interval!r}")

    for name in ("threads", "operations", "keys"):
        value = getattr(config.bench, name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigError(f"bench.{name} must be a positive integer, got {value!r}")


def load_config(config_path: str = "config/config.json") -> AppConfig:
    """Load application configuration from a JSON file."""
    try:
        with open(config_path, "r") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found at: {config_path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in configuration file {config_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration root must be an object: {config_path}")

    try:
        config = AppConfig(
            map=MapConfig(**data.get("map", {})),
            bench=BenchConfig(**data.get("bench", {})),
            logging_config=data.get("logging_config", "config/logging.yaml"),
        )
    except TypeError as e:
        raise ConfigError(f"Configuration validation error: {e}")

    _validate(config)
    return config


def build_map(map_config: MapConfig) -> AgingMap:
    """Construct an ``AgingMap`` from a ``MapConfig``."""
    try:
        return AgingMap(map_config.ttl_seconds)
    except InvalidTTLError as e:
        raise ConfigError(f"Invalid map configuration: {e}") from e
