"""Pydantic models for span fixtures described in JSON.

These models give the CLI (and tests) a typed, validated way to describe
spans without running instrumented code. Each `SpanFixture` is turned into a
real SDK `ReadableSpan` by `to_readable_span`, including dropped attribute,
event and link counts, so the converter sees exactly what an SDK pipeline
would hand it.

Example file:

    {"spans": [{"traceId": "5b8aa5a2d2c872e8321cf37308d69df2",
                "spanId": "051581bf3cb55c13",
                "name": "GET /users", "kind": "SERVER",
                "startTimeUnixNano": 1700000000000000000,
                "endTimeUnixNano": 1700000000250000000,
                "attributes": {"http.method": "GET"}}]}

A bare JSON list of span objects is accepted as well.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from opentelemetry.attributes import BoundedAttributes
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import Event, ReadableSpan
from opentelemetry.sdk.util import BoundedList
from opentelemetry.sdk.util.instrumentation import InstrumentationScope
from opentelemetry.trace import (
    INVALID_SPAN_CONTEXT,
    Link,
    SpanContext,
    SpanKind,
    Status,
    StatusCode,
    TraceFlags,
)
from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, ValidationError, field_validator

__all__ = [
    "EventFixture",
    "ScopeFixture",
    "SpanFixture",
    "SpanFixtureError",
    "SpanFixtureFile",
    "StatusFixture",
    "load_fixture_file",
    "parse_fixtures",
]


# Attribute values the SDK accepts: scalars and homogeneous lists of scalars.
_Scalar = Union[StrictBool, StrictInt, StrictFloat, str]
AttributeValue = Union[_Scalar, List[_Scalar]]


class SpanFixtureError(ValueError):
    """Raised when fixture content is not valid JSON or fails validation."""


def _bounded_attributes(attributes: Dict[str, Any], dropped: int) -> BoundedAttributes:
    # Placeholder keys go in first so the bound evicts them, leaving the real
    # attributes in place with `dropped` set to the requested count.
    seeded: Dict[str, Any] = {f"_dropped.{i}": True for i in range(dropped)}
    seeded.update(attributes)
    return BoundedAttributes(maxlen=len(attributes), attributes=seeded)


def _bounded_list(items: List[Any], dropped: int, filler: Any) -> BoundedList:
    bounded = BoundedList(len(items))
    for _ in range(dropped):
        bounded.append(filler)
    for item in items:
        bounded.append(item)
    return bounded


def _validate_hex(value: str, length: int, label: str) -> str:
    value = value.strip().lower()
    if len(value) != length:
        raise ValueError(f"{label} must be {length} hex characters")
    try:
        int(value, 16)
    except ValueError as e:
        raise ValueError(f"{label} must be hexadecimal") from e
    return value


class StatusFixture(BaseModel):
    """Span status: code name (UNSET, OK, ERROR) and optional description."""

    code: str = "UNSET"
    description: Optional[str] = None

    @field_validator("code")
    @classmethod
    def _known_code(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in StatusCode.__members__:
            raise ValueError(f"unknown status code {v!r}")
        return v

    def to_status(self) -> Status:
        code = StatusCode[self.code]
        # The SDK ignores descriptions on non-ERROR statuses (with a warning).
        if code is StatusCode.ERROR:
            return Status(code, self.description)
        return Status(code)


class EventFixture(BaseModel):
    name: str
    timeUnixNano: int = 0
    attributes: Dict[str, AttributeValue] = Field(default_factory=dict)
    droppedAttributesCount: int = Field(default=0, ge=0)

    def to_event(self) -> Event:
        return Event(
            self.name,
            attributes=_bounded_attributes(self.attributes, self.droppedAttributesCount),
            timestamp=self.timeUnixNano,
        )


class ScopeFixture(BaseModel):
    """Instrumentation scope (library) that produced the span."""

    name: str = ""
    version: Optional[str] = None
    attributes: Dict[str, AttributeValue] = Field(default_factory=dict)

    def to_scope(self) -> InstrumentationScope:
        return InstrumentationScope(self.name, self.version, attributes=self.attributes or None)


class SpanFixture(BaseModel):
    """A single span. Ids are lower-case hex; times are epoch nanoseconds."""

    traceId: str
    spanId: str
    parentSpanId: Optional[str] = None
    name: str
    kind: str = "INTERNAL"
    startTimeUnixNano: int
    endTimeUnixNano: Optional[int] = None
    status: StatusFixture = Field(default_factory=StatusFixture)
    attributes: Dict[str, AttributeValue] = Field(default_factory=dict)
    droppedAttributesCount: int = Field(default=0, ge=0)
    resource: Dict[str, AttributeValue] = Field(default_factory=dict)
    scope: Optional[ScopeFixture] = None
    events: List[EventFixture] = Field(default_factory=list)
    droppedEventsCount: int = Field(default=0, ge=0)
    droppedLinksCount: int = Field(default=0, ge=0)

    @field_validator("traceId")
    @classmethod
    def _trace_id_hex(cls, v: str) -> str:
        return _validate_hex(v, 32, "traceId")

    @field_validator("spanId")
    @classmethod
    def _span_id_hex(cls, v: str) -> str:
        return _validate_hex(v, 16, "spanId")

    @field_validator("parentSpanId")
    @classmethod
    def _parent_id_hex(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return _validate_hex(v, 16, "parentSpanId")

    @field_validator("kind")
    @classmethod
    def _known_kind(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in SpanKind.__members__:
            raise ValueError(f"unknown span kind {v!r}")
        return v

    def to_readable_span(self) -> ReadableSpan:
        """Build the SDK span record this fixture describes."""
        trace_id = int(self.traceId, 16)
        context = SpanContext(
            trace_id=trace_id,
            span_id=int(self.spanId, 16),
            is_remote=False,
            trace_flags=TraceFlags(TraceFlags.SAMPLED),
        )
        parent = None
        if self.parentSpanId is not None:
            parent = SpanContext(
                trace_id=trace_id,
                span_id=int(self.parentSpanId, 16),
                is_remote=True,
                trace_flags=TraceFlags(TraceFlags.SAMPLED),
            )
        return ReadableSpan(
            name=self.name,
            context=context,
            parent=parent,
            resource=Resource(self.resource),
            attributes=_bounded_attributes(self.attributes, self.droppedAttributesCount),
            events=_bounded_list(
                [e.to_event() for e in self.events],
                self.droppedEventsCount,
                Event("dropped"),
            ),
            links=_bounded_list([], self.droppedLinksCount, Link(INVALID_SPAN_CONTEXT)),
            kind=SpanKind[self.kind],
            status=self.status.to_status(),
            start_time=self.startTimeUnixNano,
            end_time=self.endTimeUnixNano,
            instrumentation_scope=self.scope.to_scope() if self.scope else None,
        )


class SpanFixtureFile(BaseModel):
    spans: List[SpanFixture] = Field(default_factory=list)


def parse_fixtures(data: Union[str, bytes, Dict[str, Any], List[Any]]) -> List[ReadableSpan]:
    """Parse fixture JSON (text or already-decoded) into SDK spans.

    Raises:
        SpanFixtureError: If the JSON is malformed or fails model validation
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise SpanFixtureError(f"invalid JSON: {e}") from e
    if isinstance(data, list):
        data = {"spans": data}
    try:
        fixture_file = SpanFixtureFile.model_validate(data)
    except ValidationError as e:
        raise SpanFixtureError(f"invalid span fixture: {e}") from e
    return [fixture.to_readable_span() for fixture in fixture_file.spans]


def load_fixture_file(path: Union[str, Path]) -> List[ReadableSpan]:
    """Read and parse a fixture file from disk."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise SpanFixtureError(f"cannot read {path}: {e}") from e
    return parse_fixtures(text)
