"""Prometheus metrics for the gateway."""

from actiongate.metrics.collector import (
    GATEWAY_DOCKER_DURATION,
    GATEWAY_DOCKER_ERRORS,
    GATEWAY_EXEC_OUTPUT_BYTES,
)

__all__ = [
    "GATEWAY_DOCKER_DURATION",
    "GATEWAY_DOCKER_ERRORS",
    "GATEWAY_EXEC_OUTPUT_BYTES",
]
