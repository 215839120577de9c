"""JSON-RPC primitive for the node's "query current height" call."""

import asyncio
import json
import re
import time
from typing import Any

import httpx

from node_status.core.errors import MalformedResponse, UpstreamError, UpstreamTimeoutError
from node_status.core.time_utils import elapsed_ms
from node_status.core.types import RemoteCallOutcome, RpcEndpoint

_BLOCK_NUMBER_METHOD = "eth_blockNumber"
_REQUEST_ID = 1
_HEX_QUANTITY = re.compile(r"0[xX][0-9a-fA-F]+")
_U64_MAX = 2**64 - 1


def parse_height_hex(value: object) -> int:
    """Convert a ``0x``-prefixed hex quantity to an unsigned 64-bit height.

    Letter case and leading zeros are irrelevant; anything else that is not
    plain hex digits after the prefix is rejected.
    """

    if not isinstance(value, str) or _HEX_QUANTITY.fullmatch(value) is None:
        raise MalformedResponse(f"block number is not a hex quantity: {value!r}")

    height = int(value[2:], 16)
    if height > _U64_MAX:
        raise MalformedResponse(f"block number exceeds 64 bits: {value}")
    return height


def _block_number_request() -> dict[str, Any]:
    return {"jsonrpc": "2.0", "method": _BLOCK_NUMBER_METHOD, "params": [], "id": _REQUEST_ID}


def _extract_result(response: httpx.Response) -> str:
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise UpstreamError(f"node returned HTTP {response.status_code}") from exc

    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedResponse("node returned a non-JSON body") from exc

    if not isinstance(payload, dict):
        raise MalformedResponse("JSON-RPC response must be an object")

    error = payload.get("error")
    if error is not None:
        message = error.get("message") if isinstance(error, dict) else error
        raise UpstreamError(f"JSON-RPC error: {message}")

    result = payload.get("result")
    if not isinstance(result, str):
        raise MalformedResponse("JSON-RPC response has no string result")
    return result


async def _post_block_number(client: httpx.AsyncClient, url: str, timeout_s: float) -> str:
    try:
        response = await client.post(url, json=_block_number_request(), timeout=timeout_s)
    except httpx.TimeoutException as exc:
        raise UpstreamTimeoutError(f"no answer within {timeout_s:.3f}s") from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise UpstreamError(f"transport failure: {exc!r}") from exc
    return _extract_result(response)


async def query_block_number(
    client: httpx.AsyncClient,
    endpoint: RpcEndpoint,
    timeout_ms: float | None = None,
) -> str:
    """Return the raw hex height reported by the node.

    The call is bounded by ``timeout_ms`` (defaults to the endpoint's own
    timeout) both at the transport and around the whole coroutine, so a node
    that accepts the connection but never answers still fails in time.
    """

    timeout_s = (endpoint.timeout_ms if timeout_ms is None else timeout_ms) / 1000.0
    try:
        return await asyncio.wait_for(
            _post_block_number(client, endpoint.url, timeout_s),
            timeout=timeout_s,
        )
    except asyncio.TimeoutError as exc:
        if isinstance(exc, UpstreamTimeoutError):
            raise
        raise UpstreamTimeoutError(f"no answer within {timeout_s:.3f}s") from exc


async def timed_block_number(
    client: httpx.AsyncClient,
    endpoint: RpcEndpoint,
    timeout_ms: float | None = None,
) -> RemoteCallOutcome:
    """Run one height query and report its outcome instead of raising.

    An answer only counts as a success when it carries a valid hex height.
    """

    start_ns = time.perf_counter_ns()
    try:
        result = await query_block_number(client, endpoint, timeout_ms=timeout_ms)
        parse_height_hex(result)
    except UpstreamError as exc:
        duration_ms = elapsed_ms(start_ns)
        return RemoteCallOutcome(
            succeeded=False,
            elapsed_ms=duration_ms,
            error_reason=f"{type(exc).__name__}: {exc}",
        )

    duration_ms = elapsed_ms(start_ns)
    return RemoteCallOutcome(succeeded=True, elapsed_ms=duration_ms, result=result)
