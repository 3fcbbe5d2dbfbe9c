"""Activity-feed event classification and normalization."""

from __future__ import annotations

from .classifier import classify_event, decode_events
from .models import Event, EventKind, KnownEvent, UnknownEvent
from .normalizer import get_rule, normalize_event, register

__all__ = [
    "Event",
    "EventKind",
    "KnownEvent",
    "UnknownEvent",
    "classify_event",
    "decode_events",
    "get_rule",
    "normalize_event",
    "register",
]
