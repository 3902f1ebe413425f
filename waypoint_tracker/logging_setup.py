"""Logging setup driven by ObservabilityConfig.

Modules log through ``logging.getLogger(__name__)`` and pass context
with ``extra={...}``. The JSON formatter keeps those extra fields.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import ObservabilityConfig, get_config

# Attributes every LogRecord carries; anything else came from ``extra``.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Install a root handler according to the observability settings."""
    config = config or get_config().observability

    handler = logging.StreamHandler()
    if config.structured:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))

    logging.basicConfig(level=config.level.upper(), handlers=[handler], force=True)
