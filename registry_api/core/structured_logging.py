"""JSON log line helper.

Every event is written as one JSON object so any collector can parse it
without a logging dependency of its own.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from registry_api.core.request_context import get_request_id

# Field names that must never reach a log line.
_REDACTED_FIELDS = frozenset({"password", "password_hash", "db_password"})


def log_json(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """Emit a single JSON log line tagged with the current request ID."""

    payload: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "event": event,
    }
    request_id = get_request_id()
    if request_id:
        payload["request_id"] = request_id

    for key, value in fields.items():
        payload[key] = "[redacted]" if key in _REDACTED_FIELDS else value
    logger.log(level, json.dumps(payload, default=str))
