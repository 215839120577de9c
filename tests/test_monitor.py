"""Monitor service cycles: logging of probe and height results."""

import asyncio
import itertools
import logging
from unittest.mock import Mock

import httpx

from conftest import RPC_URL, rpc_result
from node_status.core.config import Settings
from node_status.core.types import HealthStatus, ProbeConfig
from node_status.services.monitor.main import fetch_height_once, monitor_loop, probe_latency_once


def test_fetch_height_once_logs_report(node_client, endpoint, height_handler) -> None:
    logger = Mock(spec=logging.Logger)

    async def scenario():
        async with node_client(height_handler("0xa")) as client:
            return await fetch_height_once(client, endpoint, "mainnet", logger)

    report = asyncio.run(scenario())

    assert report is not None and report.height == 10
    logger.info.assert_called_once_with(
        "node_latest_block",
        extra={"blockNumberHex": "0xa", "blockNumber": 10, "chain": "mainnet"},
    )


def test_fetch_height_once_swallows_upstream_failure(node_client, endpoint) -> None:
    logger = Mock(spec=logging.Logger)

    async def scenario():
        async with node_client(lambda request: httpx.Response(503)) as client:
            return await fetch_height_once(client, endpoint, "mainnet", logger)

    assert asyncio.run(scenario()) is None
    assert logger.warning.call_args.args == ("node_latest_block_failed",)
    assert logger.warning.call_args.kwargs["extra"]["kind"] == "UpstreamError"


def test_probe_latency_once_logs_status(node_client, endpoint) -> None:
    logger = Mock(spec=logging.Logger)

    async def scenario():
        async with node_client(lambda request: httpx.Response(500)) as client:
            return await probe_latency_once(client, endpoint, ProbeConfig(sample_count=2), logger)

    report = asyncio.run(scenario())

    assert report.status is HealthStatus.DOWN
    extra = logger.info.call_args.kwargs["extra"]
    assert extra["status"] == "DOWN"
    assert extra["samples"] == 2
    assert extra["url"] == endpoint.url


def test_monitor_loop_runs_one_cycle_then_stops(node_client) -> None:
    logger = Mock(spec=logging.Logger)
    settings = Settings(_env_file=None, ETH_RPC=RPC_URL, PROBE_SAMPLES=2)
    calls = itertools.count()

    async def scenario():
        shutdown_event = asyncio.Event()

        def handler(request: httpx.Request) -> httpx.Response:
            next(calls)
            shutdown_event.set()
            return rpc_result("0x5")

        async with node_client(handler) as client:
            await asyncio.wait_for(monitor_loop(client, settings, logger, shutdown_event), timeout=5)

    asyncio.run(scenario())

    assert next(calls) == 3
    messages = [call.args[0] for call in logger.info.call_args_list]
    assert messages == ["node_latest_block", "node_latency_probe"]
