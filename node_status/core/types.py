"""Shared value types passed between the RPC primitive, the core components and the services."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class HealthStatus(str, Enum):
    """Three-tier endpoint verdict ordered by severity."""

    OK = "OK"
    WARN = "WARN"
    DOWN = "DOWN"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, HealthStatus):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other: object) -> bool:
        if not isinstance(other, HealthStatus):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, HealthStatus):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, HealthStatus):
            return NotImplemented
        return self.severity >= other.severity


_SEVERITY = {HealthStatus.OK: 0, HealthStatus.WARN: 1, HealthStatus.DOWN: 2}


@dataclass(frozen=True, slots=True)
class RpcEndpoint:
    """Where the node lives and how long a single non-probe call may take."""

    url: str
    timeout_ms: float = 5000.0


@dataclass(frozen=True, slots=True)
class ProbeConfig:
    """Immutable latency probe settings shared by every probe batch."""

    sample_count: int = 7
    ok_threshold_ms: float = 300.0
    warn_threshold_ms: float = 800.0
    max_failure_rate: float = 0.3
    timeout_ms: float = 800.0
    concurrent: bool = True

    def __post_init__(self) -> None:
        if self.sample_count < 1:
            raise ValueError("sample_count must be >= 1")
        if self.ok_threshold_ms <= 0:
            raise ValueError("ok_threshold_ms must be > 0")
        if self.warn_threshold_ms < self.ok_threshold_ms:
            raise ValueError("warn_threshold_ms must be >= ok_threshold_ms")
        if not 0.0 <= self.max_failure_rate <= 1.0:
            raise ValueError("max_failure_rate must be within [0, 1]")
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be > 0")


@dataclass(frozen=True, slots=True)
class RemoteCallOutcome:
    """Result of one timed height query."""

    succeeded: bool
    elapsed_ms: float
    error_reason: str | None = None
    result: str | None = None


@dataclass(frozen=True, slots=True)
class HeightReport:
    """Latest block height in both hex and decimal form."""

    height_hex: str
    height: int
    chain: str = "unknown"

    def to_payload(self) -> dict[str, Any]:
        return {
            "blockNumberHex": self.height_hex,
            "blockNumber": self.height,
            "chain": self.chain,
        }


@dataclass(frozen=True, slots=True)
class LatencyReport:
    """Aggregated view of one probe batch."""

    sample_count: int
    success_count: int
    p50_ms: float | None
    p95_ms: float | None
    failure_rate: float
    status: HealthStatus

    def to_payload(self) -> dict[str, Any]:
        return {
            "samples": self.sample_count,
            "successes": self.success_count,
            "p50_ms": self.p50_ms,
            "p95_ms": self.p95_ms,
            "failure_rate": self.failure_rate,
            "status": self.status.value,
        }
