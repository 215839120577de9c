"""Headless monitor that probes the node on fixed intervals and logs each verdict as JSON."""

import asyncio
import logging
import signal
import time

import httpx

from node_status.core.config import Settings, get_settings
from node_status.core.errors import UpstreamError
from node_status.core.height import fetch_height
from node_status.core.latency import probe
from node_status.core.logging import configure_logging
from node_status.core.types import HeightReport, LatencyReport, ProbeConfig, RpcEndpoint

_MIN_INTERVAL_S = 0.1


async def probe_latency_once(
    client: httpx.AsyncClient,
    endpoint: RpcEndpoint,
    config: ProbeConfig,
    logger: logging.Logger,
) -> LatencyReport:
    """Run one probe batch and log its report."""

    report = await probe(client, endpoint, config)
    logger.info("node_latency_probe", extra={"url": endpoint.url, **report.to_payload()})
    return report


async def fetch_height_once(
    client: httpx.AsyncClient,
    endpoint: RpcEndpoint,
    chain: str,
    logger: logging.Logger,
) -> HeightReport | None:
    """Fetch the height once; a failure is logged and reported as None."""

    try:
        report = await fetch_height(client, endpoint, chain=chain)
    except UpstreamError as exc:
        logger.warning(
            "node_latest_block_failed",
            extra={"url": endpoint.url, "chain": chain, "error": str(exc), "kind": type(exc).__name__},
        )
        return None

    logger.info("node_latest_block", extra=report.to_payload())
    return report


def _request_shutdown(
    shutdown_event: asyncio.Event, logger: logging.Logger, signal_name: str
) -> None:
    if shutdown_event.is_set():
        return
    logger.info("monitor_shutdown_signal", extra={"signal": signal_name})
    shutdown_event.set()


def _install_signal_handlers(shutdown_event: asyncio.Event, logger: logging.Logger) -> None:
    loop = asyncio.get_running_loop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(
                sig,
                _request_shutdown,
                shutdown_event,
                logger,
                sig.name,
            )
        except NotImplementedError:
            signal_name = sig.name
            signal.signal(
                sig,
                lambda *_, signal_name=signal_name: _request_shutdown(
                    shutdown_event, logger, signal_name
                ),
            )


async def monitor_loop(
    client: httpx.AsyncClient,
    settings: Settings,
    logger: logging.Logger,
    shutdown_event: asyncio.Event,
) -> None:
    """Alternate latency probes and height fetches until shutdown is requested."""

    endpoint = settings.rpc_endpoint()
    config = settings.probe_config()
    chain = settings.chain_label()
    latency_interval_s = max(_MIN_INTERVAL_S, settings.MONITOR_LATENCY_INTERVAL_S)
    height_interval_s = max(_MIN_INTERVAL_S, settings.MONITOR_HEIGHT_INTERVAL_S)

    next_latency = time.monotonic()
    next_height = time.monotonic()
    while not shutdown_event.is_set():
        now = time.monotonic()
        if now >= next_height:
            await fetch_height_once(client, endpoint, chain, logger)
            next_height = now + height_interval_s
        if now >= next_latency:
            await probe_latency_once(client, endpoint, config, logger)
            next_latency = now + latency_interval_s

        sleep_s = max(0.0, min(next_height, next_latency) - time.monotonic())
        try:
            await asyncio.wait_for(shutdown_event.wait(), timeout=sleep_s)
        except asyncio.TimeoutError:
            pass


async def _run() -> int:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON, service="monitor")
    logger = logging.getLogger(__name__)
    shutdown_event = asyncio.Event()

    try:
        endpoint = settings.rpc_endpoint()
        config = settings.probe_config()
    except ValueError as exc:
        logger.error("monitor_invalid_config", extra={"error": str(exc)})
        return 1

    _install_signal_handlers(shutdown_event, logger)
    logger.info(
        "monitor_startup",
        extra={
            "url": endpoint.url,
            "chain": settings.chain_label(),
            "samples": config.sample_count,
            "concurrent": config.concurrent,
            "latency_interval_s": settings.MONITOR_LATENCY_INTERVAL_S,
            "height_interval_s": settings.MONITOR_HEIGHT_INTERVAL_S,
        },
    )

    limits = httpx.Limits(max_connections=settings.RPC_MAX_CONNECTIONS)
    async with httpx.AsyncClient(limits=limits) as client:
        await monitor_loop(client, settings, logger, shutdown_event)

    logger.info("monitor_shutdown")
    return 0


def main() -> int:
    """Run the monitor process until interrupted."""

    try:
        return asyncio.run(_run())
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
