"""JSON structured logging for the flow builder."""

import json
import logging
from datetime import datetime, timezone

_STRUCTURED_FIELDS = ("node_id", "edge_id", "action", "tail_node_id", "phase", "node_count", "edge_count")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key in _STRUCTURED_FIELDS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        return json.dumps(payload, ensure_ascii=False)


def get_logger(name: str = "campaign_flow") -> logging.Logger:
    """Return a package logger; the JSON handler is installed on the root package logger once."""
    root = logging.getLogger("campaign_flow")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    return logging.getLogger(name)


def configure_logging(level: str) -> None:
    get_logger().setLevel(level.upper())
