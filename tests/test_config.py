"""Settings parsing into immutable endpoint and probe configuration."""

import pytest

from node_status.core.config import Settings
from node_status.core.types import ProbeConfig, RpcEndpoint


def test_defaults_build_probe_config() -> None:
    settings = Settings(_env_file=None)

    assert settings.probe_config() == ProbeConfig(
        sample_count=7,
        ok_threshold_ms=300.0,
        warn_threshold_ms=800.0,
        max_failure_rate=0.3,
        timeout_ms=800.0,
        concurrent=True,
    )
    assert settings.rpc_endpoint() == RpcEndpoint(url="http://127.0.0.1:8545", timeout_ms=5000.0)
    assert settings.chain_label() == "unknown"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ETH_RPC", "  https://rpc.example.org  ")
    monkeypatch.setenv("CHAIN_NAME", "holesky")
    monkeypatch.setenv("PROBE_SAMPLES", "12")
    monkeypatch.setenv("PROBE_CONCURRENT", "false")
    monkeypatch.setenv("PROBE_MAX_FAILURE_RATE", "0.5")

    settings = Settings(_env_file=None)
    config = settings.probe_config()

    assert settings.rpc_endpoint().url == "https://rpc.example.org"
    assert settings.chain_label() == "holesky"
    assert config.sample_count == 12
    assert config.concurrent is False
    assert config.max_failure_rate == 0.5


def test_blank_chain_name_falls_back() -> None:
    assert Settings(_env_file=None, CHAIN_NAME="  ").chain_label() == "unknown"


def test_invalid_probe_settings_are_rejected() -> None:
    with pytest.raises(ValueError):
        Settings(_env_file=None, PROBE_SAMPLES=0).probe_config()
    with pytest.raises(ValueError):
        Settings(_env_file=None, LATENCY_OK_MS=900.0, LATENCY_WARN_MS=800.0).probe_config()


def test_empty_rpc_url_is_rejected() -> None:
    with pytest.raises(ValueError):
        Settings(_env_file=None, ETH_RPC=" ").rpc_endpoint()


@pytest.mark.parametrize("url", ["http://[::1", "ftp://node.example.org", "node.example.org:8545", "http://"])
def test_malformed_rpc_url_is_rejected(url: str) -> None:
    with pytest.raises(ValueError):
        Settings(_env_file=None, ETH_RPC=url).rpc_endpoint()


def test_concurrent_batch_must_fit_connection_pool() -> None:
    with pytest.raises(ValueError, match="RPC_MAX_CONNECTIONS"):
        Settings(_env_file=None, PROBE_SAMPLES=30, RPC_MAX_CONNECTIONS=10).probe_config()


def test_sequential_batch_may_exceed_connection_pool() -> None:
    config = Settings(
        _env_file=None,
        PROBE_SAMPLES=30,
        RPC_MAX_CONNECTIONS=10,
        PROBE_CONCURRENT=False,
    ).probe_config()

    assert config.sample_count == 30
