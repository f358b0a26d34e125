"""Thread-safe mapping whose entries expire a fixed time after they are set."""

import logging
import math
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import (
    Any,
    Callable,
    Dict,
    Hashable,
    Iterator,
    MutableMapping,
    Tuple,
    TypeVar,
    Union,
)

from aging_map.utils.exceptions import InvalidTTLError

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

TTL = Union[int, float, timedelta]

_MISSING = object()


@dataclass
class MapStatistics:
    """Access counters for a single map, mutated under the map lock."""

    hits: int = 0
    misses: int = 0
    expired: int = 0
    purged: int = 0
    removals: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

    def as_dict(self) -> Dict[str, Any]:
        return {
            'hits': self.hits,
            'misses': self.misses,
            'expired': self.expired,
            'purged': self.purged,
            'removals': self.removals,
            'hit_rate': self.hit_rate,
        }


def ttl_to_seconds(ttl: TTL) -> float:
    """Normalize a TTL given as seconds or a timedelta, rejecting bad values."""
    if isinstance(ttl, timedelta):
        seconds = ttl.total_seconds()
    elif isinstance(ttl, bool) or not isinstance(ttl, (int, float)):
        raise InvalidTTLError(
            f"TTL must be a number of seconds or a timedelta, got {type(ttl).__name__}",
            ttl,
        )
    else:
        try:
            seconds = float(ttl)
        except OverflowError:
            raise InvalidTTLError(f"TTL is too large to represent in seconds: {ttl!r}", ttl)

    if math.isnan(seconds) or seconds < 0:
        raise InvalidTTLError(f"TTL must be non-negative, got {ttl!r}", ttl)
    return seconds


class AgingMap(MutableMapping[K, V]):
    """
    Dictionary whose entries silently disappear once they are older than ``ttl``.

    Expiry is lazy: nothing runs in the background. An entry older than the
    TTL is removed by whichever call observes it, so an expired entry is
    never distinguishable from one that was never set. Reads do not refresh
    an entry's age; only ``set`` does.

    All operations take the instance lock exactly once, so concurrent calls
    on the same key behave as if executed one at a time.
    """

    def __init__(self, ttl: TTL, clock: Callable[[], float] = time.monotonic):
        self._ttl = ttl_to_seconds(ttl)
        self._clock = clock
        self._entries: Dict[K, Tuple[V, float]] = {}
        self._lock = threading.Lock()
        self._stats = MapStatistics()
        logger.debug("Created aging map with ttl=%.3fs", self._ttl)

    @classmethod
    def with_ttl(cls, ttl: TTL, clock: Callable[[], float] = time.monotonic) -> "AgingMap[K, V]":
        """Create an empty map whose entries live for ``ttl``."""
        return cls(ttl, clock=clock)

    @property
    def ttl(self) -> float:
        """Time-to-live in seconds applied to every entry."""
        return self._ttl

    # Internal helpers; callers must hold self._lock.

    def _is_expired(self, inserted_at: float, now: float) -> bool:
        return now - inserted_at >= self._ttl

    def _lookup(self, key: K) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return _MISSING

        value, inserted_at = entry
        if self._is_expired(inserted_at, self._clock()):
            del self._entries[key]
            self._stats.expired += 1
            return _MISSING
        return value

    def _evict_expired(self) -> int:
        now = self._clock()
        stale = [
            key for key, (_, inserted_at) in self._entries.items()
            if self._is_expired(inserted_at, now)
        ]
        for key in stale:
            del self._entries[key]
        return len(stale)

    # Single implementations behind the method and subscript entry points.

    def _store(self, key: K, value: V) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock())

    def _read(self, key: K) -> Any:
        with self._lock:
            value = self._lookup(key)
            if value is _MISSING:
                self._stats.misses += 1
            else:
                self._stats.hits += 1
            return value

    def set(self, key: K, value: V) -> None:
        """Insert or overwrite ``key``, restarting its time-to-live."""
        self._store(key, value)

    def __setitem__(self, key: K, value: V) -> None:
        self._store(key, value)

    def get(self, key: K, default: Any = None) -> Any:
        """Return the live value for ``key``, or ``default`` if absent or expired."""
        value = self._read(key)
        if value is _MISSING:
            return default
        return value

    def __getitem__(self, key: K) -> V:
        value = self._read(key)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def remove(self, key: K) -> None:
        """Delete ``key`` whether or not it has expired. Absent keys are ignored."""
        with self._lock:
            if self._entries.pop(key, _MISSING) is not _MISSING:
                self._stats.removals += 1

    def __delitem__(self, key: K) -> None:
        with self._lock:
            if self._lookup(key) is _MISSING:
                raise KeyError(key)
            del self._entries[key]
            self._stats.removals += 1

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return self._lookup(key) is not _MISSING

    def __len__(self) -> int:
        with self._lock:
            self._stats.expired += self._evict_expired()
            return len(self._entries)

    def __iter__(self) -> Iterator[K]:
        return iter(self.snapshot())

    def snapshot(self) -> Dict[K, V]:
        """Copy of the live entries taken under a single lock acquisition."""
        with self._lock:
            self._stats.expired += self._evict_expired()
            return {key: value for key, (value, _) in self._entries.items()}

    # Views are built from a snapshot so an entry cannot expire mid-iteration.

    def keys(self):
        return self.snapshot().keys()

    def values(self):
        return self.snapshot().values()

    def items(self):
        return self.snapshot().items()

    def pop(self, key: K, default: Any = _MISSING) -> Any:
        with self._lock:
            value = self._lookup(key)
            if value is _MISSING:
                if default is _MISSING:
                    raise KeyError(key)
                return default
            del self._entries[key]
            self._stats.removals += 1
            return value

    def popitem(self) -> Tuple[K, V]:
        with self._lock:
            self._stats.expired += self._evict_expired()
            if not self._entries:
                raise KeyError("popitem(): aging map is empty")
            key, (value, _) = self._entries.popitem()
            self._stats.removals += 1
            return key, value

    def setdefault(self, key: K, default: Any = None) -> Any:
        with self._lock:
            value = self._lookup(key)
            if value is _MISSING:
                self._entries[key] = (default, self._clock())
                return default
            return value

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
        logger.debug("Cleared aging map (%d entries dropped)", dropped)

    def purge_expired(self) -> int:
        """Remove every expired entry now and return how many were dropped."""
        with self._lock:
            count = self._evict_expired()
            self._stats.purged += count
        if count:
            logger.debug("Purged %d expired entries", count)
        return count

    def stats(self) -> Dict[str, Any]:
        """Get map statistics. ``size`` only counts live entries."""
        with self._lock:
            self._stats.expired += self._evict_expired()
            return {
                'size': len(self._entries),
                'ttl': self._ttl,
                **self._stats.as_dict(),
            }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ttl={self._ttl!r})"
