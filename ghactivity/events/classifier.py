"""Decode raw feed envelopes into typed event variants."""

from __future__ import annotations

import copy
import typing as typ

import msgspec

from ghactivity.diagnostics import SkipReason
from ghactivity.events.models import Event, EventKind, KnownEvent, UnknownEvent

_KNOWN_TYPES = frozenset(
    kind.value for kind in EventKind if kind is not EventKind.UNKNOWN
)


def _reference(raw: typ.Mapping[str, typ.Any]) -> str:
    event_id = raw.get("id")
    return "?" if event_id is None else str(event_id)


def classify_event(raw: object) -> Event:
    """Decode one raw envelope into its typed variant.

    Parameters
    ----------
    raw
        Envelope mapping as returned by the activity feed.

    Returns
    -------
    Event
        A recognised variant carrying a deep copy of ``raw``, or an
        :class:`UnknownEvent` whose ``reason`` explains why none applied.

    Notes
    -----
    Conversion is lax, so numeric strings such as ``"42"`` are accepted
    where the feed promises integers. Values that still do not fit leave
    the variant unclassified with ``invalid_payload``.

    Examples
    --------
    >>> classify_event({"id": "1", "type": "MemberEvent"}).reason
    <SkipReason.UNKNOWN_EVENT_TYPE: 'unknown_event_type'>

    """
    if not isinstance(raw, typ.Mapping):
        return UnknownEvent(
            type="",
            id="?",
            reason=SkipReason.INVALID_PAYLOAD,
            detail=f"expected a mapping, got {type(raw).__name__}",
            raw=raw,
        )

    event_type = raw.get("type")
    if not isinstance(event_type, str) or event_type not in _KNOWN_TYPES:
        return UnknownEvent(
            type=event_type if isinstance(event_type, str) else "",
            id=_reference(raw),
            reason=SkipReason.UNKNOWN_EVENT_TYPE,
            detail=str(event_type),
            raw=raw,
        )

    untouched = copy.deepcopy(dict(raw))
    try:
        event = msgspec.convert(untouched, type=KnownEvent, strict=False)
    except msgspec.ValidationError as exc:
        return UnknownEvent(
            type=event_type,
            id=_reference(raw),
            reason=SkipReason.INVALID_PAYLOAD,
            detail=str(exc),
            raw=raw,
        )
    return msgspec.structs.replace(event, raw=untouched)


def decode_events(data: bytes | str) -> list[dict[str, typ.Any]]:
    """Decode a JSON array of feed envelopes.

    Raises
    ------
    msgspec.DecodeError
        If ``data`` is not a JSON array of objects.

    """
    return msgspec.json.decode(data, type=list[dict[str, typ.Any]])
