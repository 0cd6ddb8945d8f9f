from __future__ import annotations

import ipaddress

import pytest

from zipkin_span_converter import (
    REMOTE_ENDPOINT_PREFERRED_ATTRIBUTE_TO_RANK,
    find_remote_endpoint_preferred_attribute,
    to_remote_endpoint,
)
from zipkin_span_converter.mapping.remote_endpoint import port_from_attributes


def test_rank_table_order():
    ordered = sorted(REMOTE_ENDPOINT_PREFERRED_ATTRIBUTE_TO_RANK, key=REMOTE_ENDPOINT_PREFERRED_ATTRIBUTE_TO_RANK.get)
    assert ordered == [
        "peer.service",
        "net.peer.name",
        "net.peer.ip",
        "peer.hostname",
        "peer.address",
        "http.host",
        "db.name",
    ]


@pytest.mark.parametrize(
    "attributes",
    [
        {"peer.service": "svcA", "net.peer.name": "svcB"},
        {"net.peer.name": "svcB", "peer.service": "svcA"},
    ],
)
def test_better_rank_wins_regardless_of_order(attributes):
    assert to_remote_endpoint(attributes) == {"serviceName": "svcA"}


def test_lower_ranked_candidate_never_replaces_better_one():
    attributes = {"net.peer.name": "api.internal", "db.name": "orders", "http.host": "h"}
    assert find_remote_endpoint_preferred_attribute(attributes) == ("net.peer.name", "api.internal")


def test_equal_rank_later_attribute_wins():
    # A dict cannot repeat a key; an items() view over raw pairs can.
    class Pairs:
        def __init__(self, pairs):
            self._pairs = pairs

        def items(self):
            return iter(self._pairs)

    attrs = Pairs([("peer.service", "first"), ("peer.service", "second")])
    assert find_remote_endpoint_preferred_attribute(attrs) == ("peer.service", "second")


def test_no_candidate_means_no_endpoint():
    assert find_remote_endpoint_preferred_attribute({"http.method": "GET"}) is None
    assert to_remote_endpoint({"http.method": "GET"}) is None


def test_non_string_winner_does_not_fall_back():
    attributes = {"peer.service": 42, "net.peer.name": "fallback"}
    assert to_remote_endpoint(attributes) is None


def test_ipv4_endpoint_with_port():
    endpoint = to_remote_endpoint({"net.peer.ip": "10.0.0.1", "net.peer.port": 8080})
    assert endpoint == {
        "serviceName": "unknown",
        "ipv4": int(ipaddress.IPv4Address("10.0.0.1")),
        "port": 8080,
    }
    assert endpoint["ipv4"] == 167772161


def test_ipv6_endpoint_uses_packed_bytes_and_default_port():
    endpoint = to_remote_endpoint({"net.peer.ip": "2001:db8::1"})
    assert endpoint == {
        "serviceName": "unknown",
        "ipv6": ipaddress.IPv6Address("2001:db8::1").packed,
        "port": 0,
    }
    assert len(endpoint["ipv6"]) == 16
    assert "ipv4" not in endpoint


def test_invalid_ip_literal_yields_no_endpoint():
    assert to_remote_endpoint({"net.peer.ip": "not-an-ip"}) is None
    assert to_remote_endpoint({"net.peer.ip": "300.1.1.1"}) is None


def test_ip_only_used_when_it_is_the_winner():
    attributes = {"net.peer.ip": "10.0.0.1", "net.peer.name": "db-primary"}
    assert to_remote_endpoint(attributes) == {"serviceName": "db-primary"}


@pytest.mark.parametrize(
    "raw,expected",
    [
        (8080, 8080),
        ("8080", 8080),
        ("8080.0", 8080),
        (443.9, 443),
        (1, 1),
        (65535, 65535),
        (0, None),
        (65536, None),
        (-1, None),
        ("http", None),
        (None, None),
    ],
)
def test_port_coercion_and_range(raw, expected):
    attributes = {} if raw is None else {"net.peer.port": raw}
    assert port_from_attributes(attributes) == expected


def test_out_of_range_port_reported_as_zero():
    endpoint = to_remote_endpoint({"net.peer.ip": "192.168.1.10", "net.peer.port": 70000})
    assert endpoint["port"] == 0
