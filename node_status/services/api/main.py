"""FastAPI service exposing the node's latest block and latency verdict."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse

from node_status.core.config import Settings, get_settings
from node_status.core.errors import UpstreamError, UpstreamTimeoutError
from node_status.core.height import fetch_height
from node_status.core.latency import probe
from node_status.core.logging import configure_logging
from node_status.services.api.page import render_index

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the API app; ``transport`` replaces the network layer of the node client."""

    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON, service="api")
    endpoint = settings.rpc_endpoint()
    probe_config = settings.probe_config()
    chain = settings.chain_label()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Own the shared node client for the lifetime of the process."""

        limits = httpx.Limits(
            max_connections=settings.RPC_MAX_CONNECTIONS,
            max_keepalive_connections=settings.RPC_MAX_CONNECTIONS,
        )
        async with httpx.AsyncClient(transport=transport, limits=limits) as client:
            app.state.rpc_client = client
            logger.info(
                "api_startup",
                extra={
                    "service": "api",
                    "env": settings.ENV,
                    "version": settings.VERSION,
                    "rpc_url": endpoint.url,
                    "chain": chain,
                    "probe_samples": probe_config.sample_count,
                    "probe_concurrent": probe_config.concurrent,
                },
            )
            yield
        logger.info("api_shutdown", extra={"service": "api"})

    app = FastAPI(title=settings.APP_NAME, version=settings.VERSION, lifespan=lifespan)

    @app.get("/", response_class=HTMLResponse)
    def index() -> str:
        """Return the dashboard page."""

        return render_index(settings.APP_NAME, chain)

    @app.get("/api/latest-block")
    async def latest_block(request: Request) -> dict[str, Any]:
        """Return the node's current height; upstream failures become 502/504."""

        try:
            report = await fetch_height(request.app.state.rpc_client, endpoint, chain=chain)
        except UpstreamTimeoutError as exc:
            logger.warning("latest_block_timeout", extra={"rpc_url": endpoint.url, "error": str(exc)})
            raise HTTPException(
                status_code=504,
                detail={"error": "upstream_timeout", "message": str(exc)},
            ) from exc
        except UpstreamError as exc:
            logger.warning("latest_block_failed", extra={"rpc_url": endpoint.url, "error": str(exc)})
            raise HTTPException(
                status_code=502,
                detail={"error": "upstream_error", "message": str(exc)},
            ) from exc
        return report.to_payload()

    @app.get("/api/node-latency")
    async def node_latency(request: Request) -> dict[str, Any]:
        """Probe the node and return the latency report; always 200."""

        report = await probe(request.app.state.rpc_client, endpoint, probe_config)
        return report.to_payload()

    @app.get("/health")
    def health() -> dict[str, str]:
        """Return process liveness status."""

        return {"status": "ok"}

    @app.get("/version")
    def version() -> dict[str, str]:
        """Return application metadata from shared settings."""

        return {
            "name": settings.APP_NAME,
            "version": settings.VERSION,
            "env": settings.ENV,
        }

    return app


app = create_app()
