"""Remote endpoint resolution for CLIENT and PRODUCER spans.

Zipkin wants a single `remoteEndpoint` describing the peer a span talked to.
OpenTelemetry spreads that information over several semantic-convention
attributes, so one of them is chosen by a fixed preference ranking (lower rank
wins):

    peer.service (1) > net.peer.name (2) > net.peer.ip (3) > peer.hostname (4)
    > peer.address (5) > http.host (6) > db.name (7)

Selection Rule:
    A single pass over the span attributes in their natural order, tracking
    (best_rank, key, value). A candidate replaces the current best when its rank
    is <= the best rank, so among equal-rank candidates the later attribute
    wins. The winner is decided before its type is inspected: a non-string
    winning value yields no endpoint at all (no fallback to the next rank).

Endpoint Shapes:
    net.peer.ip  -> {"serviceName": "unknown", "ipv4": int | "ipv6": bytes,
                     "port": int}
    anything else -> {"serviceName": value}

`port` is read from `net.peer.port` and accepted only in (0, 65536); otherwise
it is reported as 0.

Public Functions:
    find_remote_endpoint_preferred_attribute: Ranked single-pass selection
    port_from_attributes: Coerce and range-check net.peer.port
    endpoint_from_ip_and_port: Build an IP endpoint or reject the literal
    to_remote_endpoint: Full resolution from a span attribute mapping
"""
from __future__ import annotations

import ipaddress
import logging
from typing import Any, Dict, Mapping, Optional, Tuple

__all__ = [
    "NET_PEER_IP_KEY",
    "NET_PEER_PORT_KEY",
    "REMOTE_ENDPOINT_PREFERRED_ATTRIBUTE_TO_RANK",
    "endpoint_from_ip_and_port",
    "find_remote_endpoint_preferred_attribute",
    "port_from_attributes",
    "to_remote_endpoint",
]

logger = logging.getLogger(__name__)

REMOTE_ENDPOINT_PREFERRED_ATTRIBUTE_TO_RANK: Dict[str, int] = {
    "peer.service": 1,
    "net.peer.name": 2,
    "net.peer.ip": 3,
    "peer.hostname": 4,
    "peer.address": 5,
    "http.host": 6,
    "db.name": 7,
}

NET_PEER_IP_KEY = "net.peer.ip"
NET_PEER_PORT_KEY = "net.peer.port"

_MAX_PORT_EXCLUSIVE = 2**16


def find_remote_endpoint_preferred_attribute(
    attributes: Mapping[str, Any],
) -> Optional[Tuple[str, Any]]:
    """Return the (key, value) pair with the best rank, or None if no key ranks."""
    preferred_rank: Optional[int] = None
    preferred: Optional[Tuple[str, Any]] = None
    for key, value in attributes.items():
        rank = REMOTE_ENDPOINT_PREFERRED_ATTRIBUTE_TO_RANK.get(key)
        if rank is None:
            continue
        if preferred_rank is None or rank <= preferred_rank:
            preferred = (key, value)
            preferred_rank = rank
    return preferred


def port_from_attributes(attributes: Mapping[str, Any]) -> Optional[int]:
    """Return `net.peer.port` as an int in (0, 65536), else None.

    Integers are taken as-is, floats are truncated and numeric strings
    (including "8080.0") are parsed. Anything that does not coerce is absent.
    """
    raw = attributes.get(NET_PEER_PORT_KEY)
    if raw is None:
        return None
    try:
        if isinstance(raw, str):
            port = int(float(raw.strip()))
        else:
            port = int(raw)
    except (TypeError, ValueError, OverflowError):
        return None
    if 0 < port < _MAX_PORT_EXCLUSIVE:
        return port
    return None


def endpoint_from_ip_and_port(ip_string: str, port: Optional[int]) -> Optional[Dict[str, Any]]:
    """Build the IP-based endpoint, or None when `ip_string` is not an IP literal."""
    try:
        address = ipaddress.ip_address(ip_string)
    except ValueError:
        logger.debug("Rejecting remote endpoint: %r is not an IP literal", ip_string)
        return None

    endpoint: Dict[str, Any] = {"serviceName": "unknown"}
    if isinstance(address, ipaddress.IPv4Address):
        endpoint["ipv4"] = int(address)
    else:
        endpoint["ipv6"] = address.packed
    endpoint["port"] = port if port is not None else 0
    return endpoint


def to_remote_endpoint(attributes: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    """Resolve the remote endpoint for a span's attributes.

    Args:
        attributes: Span attribute mapping (insertion ordered)

    Returns:
        Endpoint dict, or None when no candidate exists or the winner is unusable
    """
    preferred = find_remote_endpoint_preferred_attribute(attributes)
    if preferred is None:
        return None

    key, value = preferred
    if not isinstance(value, str):
        logger.debug(
            "Rejecting remote endpoint: %s has non-string value of type %s",
            key,
            type(value).__name__,
        )
        return None

    if key == NET_PEER_IP_KEY:
        return endpoint_from_ip_and_port(value, port_from_attributes(attributes))
    return {"serviceName": value}
