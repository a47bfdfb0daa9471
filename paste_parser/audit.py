"""Structured audit logging for the paste parser.

Rules:
- Never log the pasted text itself
- Log metadata only
- Structured JSON format
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone


logger = logging.getLogger("parser.audit")


def _emit(event: str, **kwargs) -> None:
    """Emit a structured audit log entry."""
    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "paste-parser",
        "event": event,
        **kwargs,
    }
    logger.info(json.dumps(entry, default=str))


def log_parse_received(request_id: str, text_length: int, trace_id: str) -> None:
    _emit(
        "parse_received",
        request_id=request_id,
        text_length=text_length,
        trace_id=trace_id,
    )


def log_parse_completed(
    request_id: str,
    trace_id: str,
    outcome: str,
    field_count: int,
    truncated_fields: list[str],
    missing_fields: list[str],
    network: str | None,
    duration_ms: float,
) -> None:
    _emit(
        "parse_completed",
        request_id=request_id,
        trace_id=trace_id,
        outcome=outcome,
        field_count=field_count,
        truncated_fields=truncated_fields,
        missing_fields=missing_fields,
        network=network,
        duration_ms=round(duration_ms, 2),
    )


def log_form_applied(request_id: str, trace_id: str, applied: bool) -> None:
    _emit(
        "form_applied",
        request_id=request_id,
        trace_id=trace_id,
        applied=applied,
    )
