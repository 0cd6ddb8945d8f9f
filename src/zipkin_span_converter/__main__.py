"""Command-line entry point for zipkin-span-converter.

This module provides a Typer CLI for inspecting conversions without wiring up
an SDK pipeline:
1.  Loading `.env` and the application settings.
2.  Reading span fixtures from a JSON file (zipkin_span_converter.models.fixtures).
3.  Converting them with `SpanConverter` (zipkin_span_converter.converter).
4.  Printing the resulting Zipkin records as JSON.

IPv6 remote endpoint addresses are raw bytes in the records; only this JSON
rendering turns them into their textual form.
"""
from __future__ import annotations

import ipaddress
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from dotenv import find_dotenv, load_dotenv

from .config import get_settings
from .converter import SpanConverter
from .models.fixtures import SpanFixtureError, load_fixture_file

app = typer.Typer(help="Convert OpenTelemetry span fixtures into Zipkin v2 span records")

logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)) and len(value) == 16:
        return ipaddress.IPv6Address(bytes(value)).compressed
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render_records(records: List[Dict[str, Any]], indent: int = 2) -> str:
    """Render converted records as JSON text (indent 0 = compact)."""
    if indent > 0:
        return json.dumps(records, indent=indent, default=_json_default)
    return json.dumps(records, separators=(",", ":"), default=_json_default)


@app.callback()
def main() -> None:  # pragma: no cover - simple callback
    """Load `.env` (if present) before any settings access."""
    env_file = find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(env_file)


@app.command(help="Convert spans described in a JSON fixture file and print Zipkin records.")
def convert(
    fixture_file: Path = typer.Argument(..., help="JSON file with a 'spans' list (or a bare list)"),
    service_name: Optional[str] = typer.Option(
        None, help="Default service name for spans whose resource has none"
    ),
    indent: Optional[int] = typer.Option(
        None, help="JSON indent (0 = compact). Defaults to OUTPUT_INDENT"
    ),
    debug: bool = typer.Option(False, help="Enable debug logging"),
) -> None:
    settings = get_settings()
    if service_name is not None:
        settings = settings.model_copy(update={"DEFAULT_SERVICE_NAME": service_name.strip() or None})
    logging.basicConfig(level="DEBUG" if debug else settings.effective_log_level)

    try:
        spans = load_fixture_file(fixture_file)
    except SpanFixtureError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    converter = SpanConverter.from_settings(settings)
    records = converter.convert(spans)
    logger.info("Converted %d span(s) from %s", len(records), fixture_file)
    effective_indent = settings.OUTPUT_INDENT if indent is None else max(0, indent)
    typer.echo(render_records(records, indent=effective_indent))


if __name__ == "__main__":  # pragma: no cover
    app()
