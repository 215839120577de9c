"""Shared fixtures that stand in for the remote JSON-RPC node."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from node_status.core.types import RpcEndpoint

RPC_URL = "http://node.test:8545"


def rpc_result(result: Any, status_code: int = 200) -> httpx.Response:
    """Build a JSON-RPC 2.0 success envelope."""

    body = {"jsonrpc": "2.0", "id": 1, "result": result}
    return httpx.Response(status_code=status_code, content=json.dumps(body).encode())


@pytest.fixture
def endpoint() -> RpcEndpoint:
    return RpcEndpoint(url=RPC_URL, timeout_ms=1000.0)


@pytest.fixture
def node_client() -> Callable[[Callable[[httpx.Request], Any]], httpx.AsyncClient]:
    """Return a factory producing an AsyncClient whose node is ``handler``."""

    def _factory(handler: Callable[[httpx.Request], Any]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _factory


@pytest.fixture
def height_handler() -> Callable[[str], Callable[[httpx.Request], httpx.Response]]:
    """Return a factory for handlers that always report ``height_hex``."""

    def _factory(height_hex: str) -> Callable[[httpx.Request], httpx.Response]:
        def _handler(request: httpx.Request) -> httpx.Response:
            return rpc_result(height_hex)

        return _handler

    return _factory
