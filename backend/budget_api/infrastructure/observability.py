"""Request and Service Logging — one root handler, JSON lines or plain text.

Invariants:
    - Exactly one budget API handler on the root logger, however many times the
      lifespan runs (tests build a fresh app per case)
    - JSON lines carry the record's own creation time, not the time of formatting
    - Every line names the service; budget context (project_id, currency,
      error_code, path, status_code) is added only when the caller set it
    - Handlers installed by someone else (pytest caplog, uvicorn) are left alone

Design Decisions:
    - The handler is found again by name, so reconfiguring swaps its formatter
      and level instead of stacking a second handler
"""

import json
import logging
from datetime import datetime, timezone

SERVICE_NAME = "capex-budget-api"
HANDLER_NAME = "budget_api"

CONTEXT_FIELDS: tuple[str, ...] = (
    "project_id", "currency", "error_code", "path", "status_code",
)

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s | %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def __init__(self, service: str = SERVICE_NAME):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "service": self.service,
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key)) for key in CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _budget_handler(root: logging.Logger) -> logging.Handler | None:
    for handler in root.handlers:
        if handler.get_name() == HANDLER_NAME:
            return handler
    return None


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or reconfigure) the service's root handler and return it."""
    root = logging.getLogger()
    handler = _budget_handler(root)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        root.addHandler(handler)

    handler.setFormatter(JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
