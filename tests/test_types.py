"""Value type invariants: severity order and probe configuration validation."""

import pytest

from node_status.core.types import HealthStatus, HeightReport, ProbeConfig


def test_health_status_severity_order() -> None:
    assert HealthStatus.OK < HealthStatus.WARN < HealthStatus.DOWN
    assert max(HealthStatus.WARN, HealthStatus.DOWN, HealthStatus.OK) is HealthStatus.DOWN
    assert HealthStatus.DOWN >= HealthStatus.WARN
    assert HealthStatus("WARN") is HealthStatus.WARN


@pytest.mark.parametrize(
    "kwargs",
    [
        {"sample_count": 0},
        {"ok_threshold_ms": 0.0},
        {"ok_threshold_ms": 900.0, "warn_threshold_ms": 800.0},
        {"max_failure_rate": -0.1},
        {"max_failure_rate": 1.1},
        {"timeout_ms": 0.0},
    ],
)
def test_probe_config_rejects_invalid_values(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        ProbeConfig(**kwargs)


def test_probe_config_defaults_match_dashboard_thresholds() -> None:
    config = ProbeConfig()

    assert config.ok_threshold_ms == 300.0
    assert config.warn_threshold_ms == 800.0
    assert config.timeout_ms <= config.warn_threshold_ms
    assert config.concurrent is True


def test_height_report_payload() -> None:
    report = HeightReport(height_hex="0x1b4", height=436, chain="sepolia")

    assert report.to_payload() == {"blockNumberHex": "0x1b4", "blockNumber": 436, "chain": "sepolia"}
