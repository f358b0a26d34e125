"""Tests for the background expiry sweeper."""

import asyncio
import logging
from unittest.mock import MagicMock

import pytest

from aging_map.cache.aging_map import AgingMap
from aging_map.cache.sweeper import ExpirySweeper
from aging_map.utils.exceptions import ConfigError


@pytest.mark.parametrize("interval", [0, -1, None, True, "5", float("nan")])
def test_interval_must_be_positive(aging_map, interval):
    with pytest.raises(ConfigError):
        ExpirySweeper(aging_map, interval)


def test_sweep_once(aging_map, clock):
    aging_map.set("a", 1)
    aging_map.set("b", 2)
    clock.advance(0.5)
    aging_map.set("c", 3)
    clock.advance(0.5)

    sweeper = ExpirySweeper(aging_map, interval=10)
    assert sweeper.sweep_once() == 2
    assert sweeper.sweep_once() == 0
    assert sweeper.total_purged == 2
    assert aging_map._entries.keys() == {"c"}


@pytest.mark.asyncio
async def test_background_sweep_removes_unread_entries(aging_map, clock):
    aging_map.set("never-read", "value")
    clock.advance(5)

    sweeper = ExpirySweeper(aging_map, interval=0.01)
    await sweeper.start()
    assert sweeper.running
    await asyncio.sleep(0.1)
    await sweeper.stop()

    assert not sweeper.running
    assert sweeper.total_purged == 1
    assert aging_map._entries == {}


@pytest.mark.asyncio
async def test_start_twice_and_stop_when_idle(aging_map):
    sweeper = ExpirySweeper(aging_map, interval=0.01)
    await sweeper.stop()

    await sweeper.start()
    task = sweeper._task
    await sweeper.start()
    assert sweeper._task is task

    await sweeper.stop()
    await sweeper.stop()
    assert task.cancelled()


@pytest.mark.asyncio
async def test_context_manager(aging_map):
    async with ExpirySweeper(aging_map, interval=0.01) as sweeper:
        assert sweeper.running
    assert not sweeper.running


@pytest.mark.asyncio
async def test_failed_sweep_is_logged_and_loop_continues(caplog):
    broken_map = MagicMock(spec=AgingMap)
    broken_map.purge_expired.side_effect = [RuntimeError("boom"), 3, 0, 0, 0, 0, 0, 0, 0, 0]

    sweeper = ExpirySweeper(broken_map, interval=0.01)
    with caplog.at_level(logging.ERROR, logger="aging_map.cache.sweeper"):
        await sweeper.start()
        await asyncio.sleep(0.06)
        await sweeper.stop()

    assert "Failed to purge expired entries" in caplog.text
    assert sweeper.total_purged == 3
