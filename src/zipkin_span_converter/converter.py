"""Converter: turns OpenTelemetry SDK spans into Zipkin v2 span records.

This module is the serialization boundary between the vendor-neutral tracing
data model and Zipkin's stricter, string-only span schema. It produces plain
dicts (string keys, heterogeneous values) that an external serializer or
transport encodes and ships untouched.

Key responsibilities include:
- Identity and timing: hex ids, microsecond `timestamp`, and a `duration` that
  is clamped to at least 1 µs.
- Mapping span kind and status onto Zipkin `kind` and `otel.status_code` /
  `error` tags.
- Flattening span, resource and instrumentation scope attributes into string
  tags, in that order (later sources overwrite earlier ones on collision).
- Surfacing dropped attribute/event/link counts as tags.
- Encoding events as annotations and resolving a remote endpoint for CLIENT and
  PRODUCER spans.

Instrumentation scope name/version are written as top-level record keys, not
tags. Downstream consumers read them there.

The only state held by a converter is the default service name, resolved once
from the default resource at construction and never mutated afterwards, so one
instance may be shared across threads.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.trace import (
    INVALID_SPAN_CONTEXT,
    SpanKind,
    StatusCode,
    format_span_id,
    format_trace_id,
)

from .config import Settings
from .mapping.annotations import KEY_DROPPED_ATTRIBUTES_COUNT, to_annotation
from .mapping.remote_endpoint import to_remote_endpoint
from .mapping.span_kind import to_zipkin_kind
from .mapping.tag_sanitizer import sanitize_tag_value
from .mapping.time_utils import nanos_to_micros

__all__ = [
    "KEY_DROPPED_ATTRIBUTES_COUNT",
    "KEY_DROPPED_EVENTS_COUNT",
    "KEY_DROPPED_LINKS_COUNT",
    "KEY_INSTRUMENTATION_SCOPE_NAME",
    "KEY_INSTRUMENTATION_SCOPE_VERSION",
    "STATUS_CODE_TAG_KEY",
    "STATUS_DESCRIPTION_TAG_KEY",
    "SpanConverter",
    "convert_spans",
]

STATUS_CODE_TAG_KEY = "otel.status_code"
STATUS_DESCRIPTION_TAG_KEY = "error"
KEY_INSTRUMENTATION_SCOPE_NAME = "otel.scope.name"
KEY_INSTRUMENTATION_SCOPE_VERSION = "otel.scope.version"
KEY_DROPPED_EVENTS_COUNT = "otel.dropped_events_count"
KEY_DROPPED_LINKS_COUNT = "otel.dropped_links_count"

_REMOTE_ENDPOINT_KINDS = (SpanKind.CLIENT, SpanKind.PRODUCER)

logger = logging.getLogger(__name__)


def _dropped(attributes: Any) -> int:
    """Dropped count of a BoundedAttributes mapping (0 for plain mappings)."""
    return getattr(attributes, "dropped", 0) or 0


class SpanConverter:
    """Convert SDK `ReadableSpan` objects into Zipkin v2 span dicts.

    Example:
        >>> converter = SpanConverter()
        >>> records = converter.convert(spans)
        >>> records[0]["localEndpoint"]["serviceName"]
        'unknown_service'
    """

    def __init__(self, default_resource: Optional[Resource] = None) -> None:
        """Resolve and cache the default service name.

        Args:
            default_resource: Resource supplying the fallback `service.name`.
                Defaults to `Resource.create()`, which honours
                OTEL_SERVICE_NAME and OTEL_RESOURCE_ATTRIBUTES.
        """
        resource = default_resource if default_resource is not None else Resource.create()
        self._default_service_name: str = str(resource.attributes.get(SERVICE_NAME, ""))

    @classmethod
    def from_settings(cls, settings: Settings) -> "SpanConverter":
        """Build a converter honouring `Settings.DEFAULT_SERVICE_NAME` if set."""
        if settings.DEFAULT_SERVICE_NAME:
            return cls(Resource.create({SERVICE_NAME: settings.DEFAULT_SERVICE_NAME}))
        return cls()

    @property
    def default_service_name(self) -> str:
        return self._default_service_name

    def convert(self, spans: Iterable[Any]) -> List[Dict[str, Any]]:
        """Convert spans, preserving order and cardinality (one record per span)."""
        records = [self.convert_span(span) for span in spans]
        logger.debug("Converted %d span(s) to Zipkin records", len(records))
        return records

    def convert_span(self, span: Any) -> Dict[str, Any]:
        """Convert a single span into a Zipkin record.

        Args:
            span: `ReadableSpan` (or an object exposing the same properties)

        Returns:
            New dict owned by the caller; holds no reference to `span`
        """
        attributes: Mapping[str, Any] = span.attributes or {}
        resource_attributes: Mapping[str, Any] = (
            span.resource.attributes if span.resource is not None else {}
        )
        scope = span.instrumentation_scope
        # An empty BoundedAttributes is falsy but may still carry a dropped count.
        scope_attributes: Any = getattr(scope, "attributes", None) if scope is not None else None

        context = span.context or INVALID_SPAN_CONTEXT
        start = nanos_to_micros(span.start_time or 0)
        # Unended spans are treated as zero-length.
        end = nanos_to_micros(span.end_time) if span.end_time is not None else start

        service_name = resource_attributes.get(SERVICE_NAME)
        if service_name is None:
            service_name = self._default_service_name

        row: Dict[str, Any] = {
            "id": format_span_id(context.span_id),
            "traceId": format_trace_id(context.trace_id),
            "localEndpoint": {
                "serviceName": service_name,
            },
            "name": span.name,
            "timestamp": start,
            "duration": max(1, end - start),
        }
        tags: Dict[str, str] = {}

        kind = to_zipkin_kind(span.kind)
        if kind is not None:
            row["kind"] = kind

        parent = span.parent
        if parent is not None and parent.is_valid:
            row["parentId"] = format_span_id(parent.span_id)

        status = span.status
        if status.status_code is not StatusCode.UNSET:
            tags[STATUS_CODE_TAG_KEY] = status.status_code.name
        if status.status_code is StatusCode.ERROR:
            tags[STATUS_DESCRIPTION_TAG_KEY] = status.description or ""

        if scope is not None:
            if scope.name:
                row[KEY_INSTRUMENTATION_SCOPE_NAME] = scope.name
            if scope.version is not None:
                row[KEY_INSTRUMENTATION_SCOPE_VERSION] = scope.version

        for source in (attributes, resource_attributes, scope_attributes or {}):
            for key, value in source.items():
                tags[key] = sanitize_tag_value(value)

        events = span.events
        if events:
            row["annotations"] = [to_annotation(event) for event in events]

        if span.dropped_events > 0:
            tags[KEY_DROPPED_EVENTS_COUNT] = str(span.dropped_events)
        if span.dropped_links > 0:
            tags[KEY_DROPPED_LINKS_COUNT] = str(span.dropped_links)

        dropped_attributes = (
            span.dropped_attributes + _dropped(scope_attributes) + _dropped(resource_attributes)
        )
        if dropped_attributes > 0:
            tags[KEY_DROPPED_ATTRIBUTES_COUNT] = str(dropped_attributes)

        if span.kind in _REMOTE_ENDPOINT_KINDS:
            remote_endpoint = to_remote_endpoint(attributes)
            if remote_endpoint is not None:
                row["remoteEndpoint"] = remote_endpoint

        if tags:
            row["tags"] = tags
        return row


def convert_spans(spans: Iterable[Any], converter: Optional[SpanConverter] = None) -> List[Dict[str, Any]]:
    """Convert spans with `converter`, or a fresh default converter."""
    return (converter or SpanConverter()).convert(spans)
