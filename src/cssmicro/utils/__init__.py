"""Shared helpers for the cssmicro package."""

from .logging import generate_trace_id, log_event

__all__ = ["generate_trace_id", "log_event"]
