"""Nanosecond to microsecond conversion for Zipkin timestamps.

OpenTelemetry records span and event times as integer nanoseconds since the
epoch. Zipkin v2 expects integer microseconds for both `timestamp` and
`duration`, as well as for annotation timestamps.

Public Functions:
    nanos_to_micros: Truncating nanosecond -> microsecond conversion

Design Invariant:
    Conversion truncates (floor division for non-negative input); it never
    rounds. 1_999 ns is 1 µs, not 2.
"""
from __future__ import annotations

__all__ = ["NANOS_PER_MICROSECOND", "nanos_to_micros"]

NANOS_PER_MICROSECOND = 1_000


def nanos_to_micros(nanoseconds: int) -> int:
    """Convert an epoch timestamp in nanoseconds to microseconds.

    Pure helper shared with other converters in the same pipeline.

    Args:
        nanoseconds: Integer nanoseconds (typically since the Unix epoch)

    Returns:
        Integer microseconds, truncated toward zero
    """
    if nanoseconds < 0:
        # Floor division rounds negatives away from zero.
        return -(-nanoseconds // NANOS_PER_MICROSECOND)
    return nanoseconds // NANOS_PER_MICROSECOND
