"""Tests for the aging map CLI."""

import asyncio
import json
from unittest.mock import patch

from click.testing import CliRunner

from aging_map.cache.aging_map import AgingMap
from aging_map.cli.commands import replay_scenario, run_bench
from aging_map.cli.main import cli
from aging_map.utils.config_parser import BenchConfig


def test_replay_scenario_results():
    rows = replay_scenario(1.0)
    results = [row[2] for row in rows]
    assert results == ["stored", "1", "absent", "stored", "2"]
    assert rows[2][0] == "t=1.20s"


def test_replay_scenario_scales_with_ttl():
    results = [row[2] for row in replay_scenario(10.0)]
    assert results == ["stored", "1", "absent", "stored", "2"]


def test_scenario_command():
    runner = CliRunner()
    result = runner.invoke(cli, ["scenario", "--ttl", "1.0"])
    assert result.exit_code == 0
    assert "absent" in result.output
    assert "get('a')" in result.output


def test_scenario_rejects_negative_ttl():
    runner = CliRunner()
    result = runner.invoke(cli, ["scenario", "--ttl=-1"])
    assert result.exit_code == 1
    assert "non-negative" in result.output


def test_bench_command():
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["bench", "--ttl", "0.5", "--threads", "4", "--operations", "200", "--keys", "8"],
    )
    assert result.exit_code == 0, result.output
    assert "Completed 200 operations" in result.output
    assert "hit_rate" in result.output


def test_bench_with_config_and_sweeper(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "map": {"ttl_seconds": 0.01, "sweep_interval": 0.005},
        "bench": {"threads": 2, "operations": 100, "keys": 4},
    }))

    runner = CliRunner()
    result = runner.invoke(cli, ["bench", "--config", str(path)])
    assert result.exit_code == 0, result.output
    assert "swept" in result.output


def test_bench_missing_config():
    runner = CliRunner()
    result = runner.invoke(cli, ["bench", "--config", "nope/config.json"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_bench_rejects_zero_threads():
    runner = CliRunner()
    result = runner.invoke(cli, ["bench", "--threads", "0"])
    assert result.exit_code == 1


def test_run_bench_touches_only_configured_keys():
    aging_map = AgingMap(60)
    swept = asyncio.run(run_bench(aging_map, BenchConfig(threads=3, operations=301, keys=5)))

    assert swept == 0
    stats = aging_map.stats()
    assert stats["hits"] + stats["misses"] > 0
    assert set(aging_map.keys()) <= {f"key-{i}" for i in range(5)}


def test_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_bench_rejects_zero_sweep_interval():
    runner = CliRunner()
    result = runner.invoke(cli, ["bench", "--operations", "10", "--sweep-interval", "0"])
    assert result.exit_code == 1
    assert "Sweep interval must be positive" in result.output


def test_log_config_takes_precedence_over_verbose(tmp_path):
    log_config = str(tmp_path / "logging.yaml")
    runner = CliRunner()
    with patch("aging_map.cli.main.setup_logging") as rich_setup, \
            patch("aging_map.cli.main.LoggingConfiguration.setup_logging") as yaml_setup:
        result = runner.invoke(cli, ["--log-config", log_config, "-vv", "scenario"])

    assert result.exit_code == 0, result.output
    yaml_setup.assert_called_once_with(log_config)
    rich_setup.assert_not_called()


def test_verbose_without_log_config():
    runner = CliRunner()
    with patch("aging_map.cli.main.setup_logging") as rich_setup:
        result = runner.invoke(cli, ["-vv", "scenario"])

    assert result.exit_code == 0, result.output
    rich_setup.assert_called_once_with(2)
