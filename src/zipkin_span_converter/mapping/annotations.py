"""Span event to Zipkin annotation encoding.

Zipkin annotations carry a single string `value`, while OpenTelemetry events
have a name plus structured attributes. The attributes are therefore embedded
as a compact JSON object literal inside the string:

    "<name>": {"key":"value"}     (event with attributes)
    "<name>"                      (event without attributes)

Both forms include the literal double quotes around the event name. When the
event recorded dropped attributes, the count is attached to the annotation as
its own `otel.dropped_attributes_count` key instead of being merged into
`value`.

Public Functions:
    to_annotation: Encode a single span event as an annotation dict
    event_attributes_to_json: Compact JSON for event attributes, or None
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from .time_utils import nanos_to_micros

__all__ = ["KEY_DROPPED_ATTRIBUTES_COUNT", "event_attributes_to_json", "to_annotation"]

KEY_DROPPED_ATTRIBUTES_COUNT = "otel.dropped_attributes_count"

logger = logging.getLogger(__name__)


def event_attributes_to_json(event: Any) -> Optional[str]:
    """Serialize event attributes as compact JSON.

    Returns None when the event has no attributes or when encoding fails
    (unserializable value, NaN or infinite float), so the caller can fall back to
    the name-only annotation form.
    """
    attributes = event.attributes
    if not attributes:
        return None
    try:
        return json.dumps(dict(attributes), separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        logger.debug("Event %r attributes not JSON encodable: %s", event.name, e)
        return None


def _dropped_attributes(event: Any) -> int:
    dropped = getattr(event, "dropped_attributes", None)
    if dropped is None:
        dropped = getattr(event.attributes, "dropped", 0)
    return dropped or 0


def to_annotation(event: Any) -> Dict[str, Any]:
    """Encode an OpenTelemetry span event as a Zipkin annotation.

    Args:
        event: SDK `Event` (name, timestamp in ns, attributes)

    Returns:
        Dict with `timestamp` (µs), `value`, and optionally
        `otel.dropped_attributes_count` (string encoded)
    """
    attributes_json = event_attributes_to_json(event)
    if attributes_json is not None:
        value = f'"{event.name}": {attributes_json}'
    else:
        value = f'"{event.name}"'

    annotation: Dict[str, Any] = {
        "timestamp": nanos_to_micros(event.timestamp or 0),
        "value": value,
    }
    dropped = _dropped_attributes(event)
    if dropped > 0:
        annotation[KEY_DROPPED_ATTRIBUTES_COUNT] = str(dropped)
    return annotation
