"""Nearest-rank percentiles and health classification over a probe batch."""

import math
from collections.abc import Sequence

from node_status.core.types import HealthStatus, LatencyReport, ProbeConfig, RemoteCallOutcome

# Guards ceil() against float products such as 0.95 * 20 landing just above an integer.
_RANK_PRECISION = 9


def nearest_rank_index(q: float, n: int) -> int:
    """Return the sorted-sample index for percentile ``q`` (a fraction) over ``n`` samples."""

    if n < 1:
        raise ValueError("nearest-rank percentile needs at least one sample")
    if not 0.0 < q <= 1.0:
        raise ValueError("percentile must be a fraction in (0, 1]")

    index = math.ceil(round(q * n, _RANK_PRECISION)) - 1
    return min(max(index, 0), n - 1)


def percentile(samples: Sequence[float], q: float) -> float:
    """Return the nearest-rank percentile of ``samples``; no interpolation."""

    ordered = sorted(samples)
    return ordered[nearest_rank_index(q, len(ordered))]


def classify(
    p95_ms: float | None,
    failure_rate: float,
    success_count: int,
    config: ProbeConfig,
) -> HealthStatus:
    """Map batch statistics to a status; failure rate outranks latency."""

    if success_count == 0 or p95_ms is None:
        return HealthStatus.DOWN
    if failure_rate > config.max_failure_rate:
        return HealthStatus.DOWN
    if p95_ms > config.warn_threshold_ms:
        return HealthStatus.DOWN
    if p95_ms > config.ok_threshold_ms:
        return HealthStatus.WARN
    return HealthStatus.OK


def summarize(outcomes: Sequence[RemoteCallOutcome], config: ProbeConfig) -> LatencyReport:
    """Reduce a batch of call outcomes to a LatencyReport."""

    sample_count = len(outcomes)
    if sample_count == 0:
        raise ValueError("cannot summarize an empty probe batch")

    latencies = sorted(outcome.elapsed_ms for outcome in outcomes if outcome.succeeded)
    success_count = len(latencies)
    failure_rate = (sample_count - success_count) / sample_count

    p50_ms: float | None = None
    p95_ms: float | None = None
    if latencies:
        p50_ms = percentile(latencies, 0.50)
        p95_ms = percentile(latencies, 0.95)

    return LatencyReport(
        sample_count=sample_count,
        success_count=success_count,
        p50_ms=p50_ms,
        p95_ms=p95_ms,
        failure_rate=failure_rate,
        status=classify(p95_ms, failure_rate, success_count, config),
    )
