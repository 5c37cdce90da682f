"""Structured logging for external lookups (geocoding, directions)."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredLookupLogger:
    """Structured logger for calls to the mapping collaborators."""

    def log_lookup(
        self,
        lookup: str,
        outcome: str,
        latency_ms: float,
        mode: str | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log a geocode or route lookup with structured data."""
        log_data: dict[str, Any] = {
            "lookup": lookup,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if mode:
            log_data["mode"] = mode
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Lookup: {lookup} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
