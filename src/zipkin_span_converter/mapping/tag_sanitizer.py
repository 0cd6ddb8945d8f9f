"""Flatten OpenTelemetry attribute values into Zipkin tag strings.

Zipkin tags must be strings, but OpenTelemetry accepts strings, booleans,
numbers, and homogeneous sequences of each. This module reconciles the two by
producing a best-effort string for every value it is handed.

Conversion Rules:
    bool            -> "true" / "false" (explicit branch, never str(bool))
    list / tuple    -> each element sanitized, joined with ","
    int / float     -> str() decimal representation
    str             -> unchanged
    anything else   -> str(value), or "" when str() itself fails
    cyclic sequence -> ""

Known Limitation:
    Floats are rendered with Python's shortest round-trip repr. Very large
    magnitudes switch to exponent notation (1e+16) and very high-precision
    values carry only what an IEEE-754 double holds. This is accepted, not
    corrected.

Public Functions:
    sanitize_tag_value: Convert any attribute value to a tag string

Design Invariant:
    Never raises. The SDK does not guarantee stringifiable attribute values,
    and a single bad value must not abort conversion of the span.
"""
from __future__ import annotations

import logging
from typing import Any

__all__ = ["sanitize_tag_value"]

logger = logging.getLogger(__name__)


def _stringify(value: Any) -> str:
    # bool must be checked before int (bool is an int subclass).
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join(_stringify(v) for v in value)
    try:
        return str(value)
    except Exception as e:  # noqa: BLE001 - arbitrary __str__ implementations
        logger.debug("Unstringifiable tag value of type %s: %s", type(value).__name__, e)
        return ""


def sanitize_tag_value(value: Any) -> str:
    """Return the Zipkin tag string for an attribute value.

    Args:
        value: Scalar (bool, int, float, str) or sequence of scalars

    Returns:
        String representation; empty string if the value cannot be stringified
    """
    try:
        return _stringify(value)
    except RecursionError:
        # Self-referencing (or absurdly deep) sequence; unwinds to here.
        logger.debug("Unstringifiable tag value of type %s: nested too deeply", type(value).__name__)
        return ""
