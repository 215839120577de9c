"""Latest block height lookup against the configured node."""

import logging

import httpx

from node_status.core.rpc import parse_height_hex, query_block_number
from node_status.core.types import HeightReport, RpcEndpoint

__all__ = ["fetch_height", "parse_height_hex"]

logger = logging.getLogger(__name__)


async def fetch_height(
    client: httpx.AsyncClient,
    endpoint: RpcEndpoint,
    chain: str = "unknown",
) -> HeightReport:
    """Ask the node for its current height once; errors propagate to the caller."""

    height_hex = await query_block_number(client, endpoint)
    height = parse_height_hex(height_hex)
    logger.debug("latest_block_fetched", extra={"chain": chain, "block_number": height})
    return HeightReport(height_hex=height_hex, height=height, chain=chain)
