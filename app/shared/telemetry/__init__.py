"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from app.shared.telemetry.logging import RequestContextFilter, setup_logging
from app.shared.telemetry.telemetry import TelemetryConfig
from app.shared.telemetry.tracing import get_trace_id, traced

__all__ = [
    "RequestContextFilter",
    "TelemetryConfig",
    "get_trace_id",
    "setup_logging",
    "traced",
]
