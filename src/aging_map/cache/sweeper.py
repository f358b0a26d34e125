"""Optional background task that proactively drops expired map entries."""

import asyncio
import logging
import math
from typing import Optional

from aging_map.cache.aging_map import AgingMap
from aging_map.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)


def is_valid_interval(interval) -> bool:
    """Positive number of seconds. Bools and NaN are rejected."""
    if isinstance(interval, bool) or not isinstance(interval, (int, float)):
        return False
    return not math.isnan(interval) and interval > 0


class ExpirySweeper:
    """Periodically purge expired entries from an ``AgingMap``.

    The map stays correct without a sweeper; this only bounds memory held by
    keys that are set once and never read again.
    """

    def __init__(self, aging_map: AgingMap, interval: float) -> None:
        if not is_valid_interval(interval):
            raise ConfigError(f"Sweep interval must be positive, got {interval!r}")
        self.aging_map = aging_map
        self.interval = interval
        self.total_purged = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sweep_once(self) -> int:
        """Purge the map once and return the number of entries removed."""
        count = self.aging_map.purge_expired()
        self.total_purged += count
        if count:
            logger.debug("[SWEEP] Removed %d expired entries", count)
        return count

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("[SWEEP] Started with interval %.2fs", self.interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("[SWEEP] Stopped after removing %d entries", self.total_purged)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.sweep_once()
            except Exception:
                logger.exception("[SWEEP] Failed to purge expired entries")

    async def __aenter__(self) -> "ExpirySweeper":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
