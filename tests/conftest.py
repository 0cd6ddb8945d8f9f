from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
from opentelemetry.attributes import BoundedAttributes
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import Event, ReadableSpan
from opentelemetry.sdk.util.instrumentation import InstrumentationScope
from opentelemetry.trace import SpanContext, SpanKind, Status, StatusCode, TraceFlags

from zipkin_span_converter import SpanConverter

TRACE_ID = 0x5B8AA5A2D2C872E8321CF37308D69DF2
SPAN_ID = 0x051581BF3CB55C13
PARENT_ID = 0x5FB397BE34D26B51


def make_span(
    *,
    name: str = "op",
    kind: SpanKind = SpanKind.INTERNAL,
    start: Optional[int] = 1_700_000_000_000_000_000,
    end: Optional[int] = 1_700_000_000_250_000_000,
    parent_id: Optional[int] = None,
    status: Optional[Status] = None,
    attributes: Optional[Dict[str, Any]] = None,
    resource: Optional[Dict[str, Any]] = None,
    scope: Optional[InstrumentationScope] = None,
    events: Optional[List[Event]] = None,
) -> ReadableSpan:
    context = SpanContext(TRACE_ID, SPAN_ID, is_remote=False, trace_flags=TraceFlags(TraceFlags.SAMPLED))
    parent = None
    if parent_id is not None:
        parent = SpanContext(TRACE_ID, parent_id, is_remote=True, trace_flags=TraceFlags(TraceFlags.SAMPLED))
    return ReadableSpan(
        name=name,
        context=context,
        parent=parent,
        resource=Resource(resource if resource is not None else {"service.name": "checkout"}),
        attributes=attributes if isinstance(attributes, BoundedAttributes) else BoundedAttributes(attributes=attributes or {}),
        events=tuple(events or ()),
        kind=kind,
        status=status or Status(StatusCode.UNSET),
        start_time=start,
        end_time=end,
        instrumentation_scope=scope,
    )


@pytest.fixture
def converter() -> SpanConverter:
    return SpanConverter(Resource({"service.name": "default-svc"}))
