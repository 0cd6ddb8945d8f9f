"""SDK pipeline adapter: hands converted Zipkin records to a caller-owned sink.

`ZipkinRecordExporter` plugs the converter into an OpenTelemetry SDK
`TracerProvider` (typically behind a `BatchSpanProcessor`). Each exported batch
is converted and the resulting record list is passed to `sink`, which owns
encoding and transport (HTTP POST, file, queue...). Batching stays with the
span processor; retries and backoff stay with the sink.

Sink failures are logged and reported as `SpanExportResult.FAILURE`; they are
never propagated into the instrumented application.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence

from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult

from .converter import SpanConverter

logger = logging.getLogger(__name__)

__all__ = ["RecordSink", "ZipkinRecordExporter"]

RecordSink = Callable[[List[Dict[str, Any]]], None]


class ZipkinRecordExporter(SpanExporter):
    """Convert exported span batches and forward the records to a sink."""

    def __init__(self, sink: RecordSink, converter: Optional[SpanConverter] = None) -> None:
        self._sink = sink
        self._converter = converter or SpanConverter()
        self._shutdown = False
        self._lock = threading.Lock()

    @property
    def converter(self) -> SpanConverter:
        return self._converter

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        if self._shutdown:
            logger.warning("Exporter already shut down; dropping %d span(s)", len(spans))
            return SpanExportResult.FAILURE
        if not spans:
            return SpanExportResult.SUCCESS
        records = self._converter.convert(spans)
        try:
            with self._lock:
                self._sink(records)
        except Exception as e:  # noqa: BLE001 - sink is caller code
            logger.warning("Zipkin record sink failed for %d span(s): %s", len(records), e)
            return SpanExportResult.FAILURE
        return SpanExportResult.SUCCESS

    def shutdown(self) -> None:
        self._shutdown = True

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        # Records are handed to the sink synchronously; nothing is buffered here.
        return True
