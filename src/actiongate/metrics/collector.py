"""Prometheus metrics definitions for the gateway.

Tracks Docker API calls issued on behalf of callers:
- lifecycle actions (start, stop, restart, pause, unpause, kill)
- exec sessions (create, start, stream)
"""

from prometheus_client import Counter, Histogram

# =============================================================================
# Histogram Buckets
# =============================================================================
# Lifecycle calls are fast, but stop/restart wait for the grace period and
# exec streams last as long as the command runs.
_BUCKETS_SLOW = (
    0.05, 0.1, 0.2, 0.4, 0.8,
    1.5, 3, 6, 12, 24,
    48, 96, 180,
)

# =============================================================================
# Docker Operation Metrics
# =============================================================================

GATEWAY_DOCKER_DURATION = Histogram(
    "actiongate_docker_duration_seconds",
    "Duration of Docker operations",
    ["operation"],  # start, stop, ..., exec_create, exec_start, exec_stream
    buckets=_BUCKETS_SLOW,
)

GATEWAY_DOCKER_ERRORS = Counter(
    "actiongate_docker_errors_total",
    "Total Docker operation errors",
    ["operation", "error_type"],  # error_type: api_error, not_modified, connection
)

# =============================================================================
# Exec Output Metrics
# =============================================================================

GATEWAY_EXEC_OUTPUT_BYTES = Counter(
    "actiongate_exec_output_bytes_total",
    "Total bytes of exec output captured",
    ["kind"],  # script, command
)


_OPERATIONS = (
    "start", "stop", "restart", "pause", "unpause", "kill",
    "exec_create", "exec_start", "exec_stream",
)


def _init_metrics() -> None:
    """Initialize labeled metrics with zero values."""
    for op in _OPERATIONS:
        GATEWAY_DOCKER_DURATION.labels(operation=op)
        for error_type in ("api_error", "not_modified", "connection"):
            GATEWAY_DOCKER_ERRORS.labels(operation=op, error_type=error_type)

    for kind in ("script", "command"):
        GATEWAY_EXEC_OUTPUT_BYTES.labels(kind=kind)


_init_metrics()
