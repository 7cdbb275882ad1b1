"""Logging configuration for the gateway.

Supports two formats:
- text: Human-readable for local development
- json: Structured logging for production (log aggregation)

Records about a container carry its context in ``extra`` (``container``,
``action``, ``kind``, ``exec_name``). Both formats render that context
together so one request can be followed through the log.
"""

import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger import json as jsonlogger

from actiongate.config import LoggingConfig

TARGET_FIELDS = ("container", "action", "kind", "exec_name")


def _target(record: logging.LogRecord) -> dict[str, Any]:
    return {
        field: getattr(record, field)
        for field in TARGET_FIELDS
        if getattr(record, field, None) is not None
    }


class RateLimitFilter(logging.Filter):
    """Suppress repeats of the same event for the same container.

    A client hammering one container (for example repeating a failing
    power action) produces one record per window instead of one per
    request. ERROR and above always pass.
    """

    def __init__(self, rate_limit_seconds: float = 5.0, name: str = "") -> None:
        super().__init__(name)
        self._rate_limit = rate_limit_seconds
        self._last_seen: dict[tuple[Any, ...], float] = {}

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= logging.ERROR:
            return True

        key = (
            record.name,
            getattr(record, "event", None),
            tuple(_target(record).items()),
            record.getMessage(),
        )
        now = time.monotonic()
        if now - self._last_seen.get(key, float("-inf")) < self._rate_limit:
            return False
        self._last_seen[key] = now
        return True


class GatewayJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with the service name and a nested ``target`` object."""

    def __init__(self, config: LoggingConfig, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._service = config.service_name

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.fromtimestamp(
            record.created, tz=timezone.utc
        ).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = self._service

        target = _target(record)
        if target:
            for field in target:
                log_record.pop(field, None)
            log_record["target"] = target

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        log_record.pop("color_message", None)


class GatewayTextFormatter(logging.Formatter):
    """Plain formatter that appends the event and container context."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = [f"{key}={value}" for key, value in _target(record).items()]
        event = getattr(record, "event", None)
        if event is not None:
            context.insert(0, str(event))
        if context:
            line = f"{line} [{' '.join(context)}]"
        return line


def setup_logging(config: LoggingConfig) -> None:
    """Configure root and uvicorn loggers.

    Args:
        config: Logging configuration settings.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)

    if config.format == "json":
        formatter: logging.Formatter = GatewayJsonFormatter(config)
    else:
        formatter = GatewayTextFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(RateLimitFilter(rate_limit_seconds=5.0))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in ("uvicorn", "uvicorn.error"):
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = False
        uv_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").disabled = True

    # httpx logs every Docker API request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
