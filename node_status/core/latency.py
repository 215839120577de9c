"""Latency prober: a fixed batch of timed height queries reduced to a health verdict."""

import asyncio
import logging

import httpx

from node_status.core.rpc import timed_block_number
from node_status.core.stats import summarize
from node_status.core.types import LatencyReport, ProbeConfig, RemoteCallOutcome, RpcEndpoint

logger = logging.getLogger(__name__)


async def _collect_outcomes(
    client: httpx.AsyncClient,
    endpoint: RpcEndpoint,
    config: ProbeConfig,
) -> list[RemoteCallOutcome]:
    if config.concurrent:
        calls = [
            timed_block_number(client, endpoint, timeout_ms=config.timeout_ms)
            for _ in range(config.sample_count)
        ]
        return list(await asyncio.gather(*calls))

    outcomes: list[RemoteCallOutcome] = []
    for _ in range(config.sample_count):
        outcomes.append(await timed_block_number(client, endpoint, timeout_ms=config.timeout_ms))
    return outcomes


async def probe(
    client: httpx.AsyncClient,
    endpoint: RpcEndpoint,
    config: ProbeConfig,
) -> LatencyReport:
    """Measure the endpoint ``config.sample_count`` times and classify the result.

    Unreachable or misbehaving nodes are reported through the returned status,
    never as an exception.
    """

    outcomes = await _collect_outcomes(client, endpoint, config)
    report = summarize(outcomes, config)

    failures = [outcome.error_reason for outcome in outcomes if not outcome.succeeded]
    if failures:
        logger.warning(
            "latency_probe_failures",
            extra={
                "url": endpoint.url,
                "failed": len(failures),
                "samples": report.sample_count,
                "first_error": failures[0],
            },
        )
    return report
