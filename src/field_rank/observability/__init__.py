"""Logging, tracing and metrics for the scoring stack."""

from field_rank.observability.context import get_trace_context, trace_context
from field_rank.observability.logging import JsonFormatter, configure_logging
from field_rank.observability.metrics import (
    CORPUS_DOCUMENTS,
    PARAMETER_WRITE_ERRORS,
    SCORE_LATENCY,
    SCORES_COMPUTED,
    get_metrics,
    init_metrics,
    track_latency,
)
from field_rank.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "CORPUS_DOCUMENTS",
    "PARAMETER_WRITE_ERRORS",
    "SCORES_COMPUTED",
    "SCORE_LATENCY",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_trace_context",
    "get_tracer",
    "init_metrics",
    "init_tracing",
    "trace_context",
    "track_latency",
]
