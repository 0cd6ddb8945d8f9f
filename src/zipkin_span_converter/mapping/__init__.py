"""Internal mapping subpackage for the span -> Zipkin record conversion.

The public entry point is `zipkin_span_converter.converter.SpanConverter`,
which assembles a record per span and delegates each field family to one of
these focused helpers. Every function here is pure: no I/O and no shared
mutable state.

Modules:
    time_utils: Nanosecond -> microsecond truncation
    tag_sanitizer: Attribute value -> tag string flattening
    span_kind: OpenTelemetry SpanKind -> Zipkin kind literal
    annotations: Span event -> annotation encoding
    remote_endpoint: Ranked remote endpoint selection and IP/port encoding

Design Invariants:
    - Helpers never raise for malformed attribute content; they degrade
    - Deterministic output for identical inputs
"""
from __future__ import annotations

from . import annotations as annotations  # noqa: F401
from . import remote_endpoint as remote_endpoint  # noqa: F401
from . import span_kind as span_kind  # noqa: F401
from . import tag_sanitizer as tag_sanitizer  # noqa: F401
from . import time_utils as time_utils  # noqa: F401

__all__ = ["annotations", "remote_endpoint", "span_kind", "tag_sanitizer", "time_utils"]
