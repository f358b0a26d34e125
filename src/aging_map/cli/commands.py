"""CLI commands for exercising an aging map."""

import asyncio
import logging
import random
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

import click

from aging_map.cache.aging_map import AgingMap
from aging_map.cache.sweeper import ExpirySweeper
from aging_map.cli.output import RichOutput, format_duration
from aging_map.utils.clock import ManualClock
from aging_map.utils.config_parser import AppConfig, BenchConfig, build_map, load_config
from aging_map.utils.exceptions import AgingMapError

logger = logging.getLogger(__name__)
output = RichOutput()

# (time as a fraction of the TTL, operation, key, value)
SCENARIO_TIMELINE = [
    (0.0, "set", "a", 1),
    (0.5, "get", "a", None),
    (1.2, "get", "a", None),
    (1.3, "set", "a", 2),
    (1.4, "get", "a", None),
]


def replay_scenario(ttl: float) -> List[tuple]:
    """Run the reference timeline against a map driven by a manual clock.

    Returns one ``(time, operation, result)`` row per step.
    """
    clock = ManualClock()
    aging_map = AgingMap(ttl, clock=clock)
    rows = []
    for fraction, operation, key, value in SCENARIO_TIMELINE:
        clock.set(fraction * ttl)
        if operation == "set":
            aging_map.set(key, value)
            result = "stored"
            label = f"set({key!r}, {value!r})"
        else:
            found = aging_map.get(key)
            result = "absent" if found is None else repr(found)
            label = f"get({key!r})"
        rows.append((f"t={clock():.2f}s", label, result))
    return rows


def _bench_worker(aging_map: AgingMap, seed: int, operations: int, keys: int) -> None:
    rng = random.Random(seed)
    for _ in range(operations):
        key = f"key-{rng.randrange(keys)}"
        roll = rng.random()
        if roll < 0.5:
            aging_map.get(key)
        elif roll < 0.9:
            aging_map.set(key, seed)
        else:
            aging_map.remove(key)


async def run_bench(
    aging_map: AgingMap, bench: BenchConfig, sweep_interval: Optional[float] = None
) -> int:
    """Drive a mixed get/set/remove workload from a thread pool.

    Returns the number of entries the sweeper purged (0 without a sweeper).
    """
    loop = asyncio.get_running_loop()
    sweeper = ExpirySweeper(aging_map, sweep_interval) if sweep_interval is not None else None
    per_worker, remainder = divmod(bench.operations, bench.threads)

    if sweeper is not None:
        await sweeper.start()
    try:
        with ThreadPoolExecutor(max_workers=bench.threads) as pool:
            await asyncio.gather(*(
                loop.run_in_executor(
                    pool,
                    _bench_worker,
                    aging_map,
                    worker,
                    per_worker + (1 if worker < remainder else 0),
                    bench.keys,
                )
                for worker in range(bench.threads)
            ))
    finally:
        if sweeper is not None:
            await sweeper.stop()
    return sweeper.total_purged if sweeper is not None else 0


@click.command()
@click.option("--ttl", type=float, default=1.0, show_default=True, help="TTL in seconds.")
def scenario(ttl):
    """Replay the reference set/get timeline on a simulated clock."""
    try:
        rows = replay_scenario(ttl)
    except AgingMapError as e:
        output.error(str(e))
        raise SystemExit(1)

    output.table(f"Aging map timeline (ttl={ttl}s)", ["Time", "Operation", "Result"], rows)


@click.command()
@click.option("--config", "config_path", default=None, help="Path to configuration file.")
@click.option("--ttl", type=float, default=None, help="Override the TTL in seconds.")
@click.option("--threads", type=int, default=None, help="Worker threads.")
@click.option("--operations", type=int, default=None, help="Total operations to run.")
@click.option("--keys", type=int, default=None, help="Distinct keys to touch.")
@click.option("--sweep-interval", type=float, default=None, help="Run a background sweeper.")
def bench(config_path, ttl, threads, operations, keys, sweep_interval):
    """Run a concurrent workload against an aging map and report statistics."""
    try:
        config = load_config(config_path) if config_path else AppConfig()
    except (FileNotFoundError, AgingMapError) as e:
        output.error(str(e))
        raise SystemExit(1)

    if ttl is not None:
        config.map.ttl_seconds = ttl
    if threads is not None:
        config.bench.threads = threads
    if operations is not None:
        config.bench.operations = operations
    if keys is not None:
        config.bench.keys = keys
    if sweep_interval is not None:
        config.map.sweep_interval = sweep_interval

    if min(config.bench.threads, config.bench.operations, config.bench.keys) < 1:
        output.error("threads, operations and keys must all be positive")
        raise SystemExit(1)

    try:
        aging_map = build_map(config.map)
        logger.info(
            "Running %d operations on %d threads over %d keys",
            config.bench.operations, config.bench.threads, config.bench.keys,
        )
        start = time.perf_counter()
        swept = asyncio.run(run_bench(aging_map, config.bench, config.map.sweep_interval))
        elapsed = time.perf_counter() - start
    except AgingMapError as e:
        output.error(str(e))
        raise SystemExit(1)

    stats = aging_map.stats()
    rows = [[name, value] for name, value in stats.items()]
    rows.append(["swept", swept])
    rows.append(["elapsed", format_duration(elapsed)])
    rows.append(["ops/sec", f"{config.bench.operations / elapsed:,.0f}" if elapsed > 0 else "n/a"])
    output.table("Aging map statistics", ["Metric", "Value"], rows)
    output.success(f"Completed {config.bench.operations} operations")
