"""OpenTelemetry SpanKind to Zipkin `kind` mapping.

Zipkin has no notion of an internal span: INTERNAL spans (and any value this
module does not recognize) produce no `kind` key at all.
"""
from __future__ import annotations

from typing import Any, Optional

from opentelemetry.trace import SpanKind

__all__ = ["ZipkinSpanKind", "to_zipkin_kind"]


class ZipkinSpanKind:
    """Zipkin v2 span kind literals."""

    SERVER = "SERVER"
    CLIENT = "CLIENT"
    PRODUCER = "PRODUCER"
    CONSUMER = "CONSUMER"


_KIND_MAP = {
    SpanKind.SERVER: ZipkinSpanKind.SERVER,
    SpanKind.CLIENT: ZipkinSpanKind.CLIENT,
    SpanKind.PRODUCER: ZipkinSpanKind.PRODUCER,
    SpanKind.CONSUMER: ZipkinSpanKind.CONSUMER,
    SpanKind.INTERNAL: None,
}


def to_zipkin_kind(kind: Any) -> Optional[str]:
    """Return the Zipkin kind for an OTel span kind, or None to omit it."""
    try:
        return _KIND_MAP.get(kind)
    except TypeError:  # unhashable garbage
        return None
