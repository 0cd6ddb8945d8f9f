"""zipkin-span-converter: OpenTelemetry SDK spans -> Zipkin v2 span records.

Example:
    >>> from zipkin_span_converter import SpanConverter
    >>> records = SpanConverter().convert(finished_spans)

The records are plain dicts; encoding and transport belong to the caller (see
`ZipkinRecordExporter` for plugging the converter into a TracerProvider).
"""

__version__ = "0.1.0"

from zipkin_span_converter.converter import (
    KEY_DROPPED_ATTRIBUTES_COUNT,
    KEY_DROPPED_EVENTS_COUNT,
    KEY_DROPPED_LINKS_COUNT,
    KEY_INSTRUMENTATION_SCOPE_NAME,
    KEY_INSTRUMENTATION_SCOPE_VERSION,
    STATUS_CODE_TAG_KEY,
    STATUS_DESCRIPTION_TAG_KEY,
    SpanConverter,
    convert_spans,
)
from zipkin_span_converter.exporter import ZipkinRecordExporter
from zipkin_span_converter.mapping.annotations import to_annotation
from zipkin_span_converter.mapping.remote_endpoint import (
    REMOTE_ENDPOINT_PREFERRED_ATTRIBUTE_TO_RANK,
    find_remote_endpoint_preferred_attribute,
    to_remote_endpoint,
)
from zipkin_span_converter.mapping.span_kind import ZipkinSpanKind, to_zipkin_kind
from zipkin_span_converter.mapping.tag_sanitizer import sanitize_tag_value
from zipkin_span_converter.mapping.time_utils import NANOS_PER_MICROSECOND, nanos_to_micros

__all__ = [
    "KEY_DROPPED_ATTRIBUTES_COUNT",
    "KEY_DROPPED_EVENTS_COUNT",
    "KEY_DROPPED_LINKS_COUNT",
    "KEY_INSTRUMENTATION_SCOPE_NAME",
    "KEY_INSTRUMENTATION_SCOPE_VERSION",
    "NANOS_PER_MICROSECOND",
    "REMOTE_ENDPOINT_PREFERRED_ATTRIBUTE_TO_RANK",
    "STATUS_CODE_TAG_KEY",
    "STATUS_DESCRIPTION_TAG_KEY",
    "SpanConverter",
    "ZipkinRecordExporter",
    "ZipkinSpanKind",
    "convert_spans",
    "find_remote_endpoint_preferred_attribute",
    "nanos_to_micros",
    "sanitize_tag_value",
    "to_annotation",
    "to_remote_endpoint",
    "to_zipkin_kind",
]
