"""Environment-driven settings shared by the API and monitor services."""

from functools import lru_cache

import httpx
from pydantic_settings import BaseSettings, SettingsConfigDict

from node_status.core.types import ProbeConfig, RpcEndpoint

_RPC_SCHEMES = {"http", "https"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables or a local .env file."""

    APP_NAME: str = "Web3 Node Status"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    VERSION: str = "0.1.0"
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    ETH_RPC: str = "http://127.0.0.1:8545"
    CHAIN_NAME: str = "unknown"
    RPC_TIMEOUT_MS: float = 5000.0
    RPC_MAX_CONNECTIONS: int = 20
    PROBE_SAMPLES: int = 7
    PROBE_TIMEOUT_MS: float = 800.0
    PROBE_CONCURRENT: bool = True
    LATENCY_OK_MS: float = 300.0
    LATENCY_WARN_MS: float = 800.0
    PROBE_MAX_FAILURE_RATE: float = 0.3
    MONITOR_LATENCY_INTERVAL_S: float = 7.0
    MONITOR_HEIGHT_INTERVAL_S: float = 15.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def rpc_endpoint(self) -> RpcEndpoint:
        """Return the node descriptor with surrounding whitespace removed."""

        url = self.ETH_RPC.strip()
        if not url:
            raise ValueError("ETH_RPC must not be empty")
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as exc:
            raise ValueError(f"ETH_RPC is not a valid URL: {exc}") from exc
        if parsed.scheme not in _RPC_SCHEMES:
            raise ValueError("ETH_RPC must start with http:// or https://")
        if not parsed.host:
            raise ValueError("ETH_RPC must include a host")
        if self.RPC_TIMEOUT_MS <= 0:
            raise ValueError("RPC_TIMEOUT_MS must be > 0")
        return RpcEndpoint(url=url, timeout_ms=self.RPC_TIMEOUT_MS)

    def chain_label(self) -> str:
        """Return the display label for the chain, falling back to 'unknown'."""

        return self.CHAIN_NAME.strip() or "unknown"

    def probe_config(self) -> ProbeConfig:
        """Build the immutable probe configuration; invalid values raise ValueError.

        A concurrent batch must fit in the connection pool, otherwise time spent
        waiting for a free connection would be counted as node latency.
        """

        if self.PROBE_CONCURRENT and self.PROBE_SAMPLES > self.RPC_MAX_CONNECTIONS:
            raise ValueError("RPC_MAX_CONNECTIONS must be >= PROBE_SAMPLES when PROBE_CONCURRENT is set")

        return ProbeConfig(
            sample_count=self.PROBE_SAMPLES,
            ok_threshold_ms=self.LATENCY_OK_MS,
            warn_threshold_ms=self.LATENCY_WARN_MS,
            max_failure_rate=self.PROBE_MAX_FAILURE_RATE,
            timeout_ms=self.PROBE_TIMEOUT_MS,
            concurrent=self.PROBE_CONCURRENT,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings to avoid repeated environment parsing."""

    return Settings()
