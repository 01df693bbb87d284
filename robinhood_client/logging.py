from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict

_RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}

# Never emitted, even when passed through ``extra``.
_REDACTED_KEYS = {"password", "mfa_code", "access_token", "refresh_token", "token"}

_HANDLER_NAME = "robinhood_client.json"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RECORD_ATTRS:
                continue
            payload[key] = "***" if key in _REDACTED_KEYS else value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def configure_logging(level: str = "INFO", stream: IO[str] | None = None) -> logging.Logger:
    logger = logging.getLogger("robinhood_client")
    logger.setLevel(level)
    logger.propagate = False

    # Only the handler installed here is reused; handlers added by others are left alone.
    for handler in logger.handlers:
        if handler.get_name() == _HANDLER_NAME and isinstance(handler, logging.StreamHandler):
            if stream is not None:
                handler.setStream(stream)
            handler.setFormatter(JsonFormatter())
            return logger

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger
