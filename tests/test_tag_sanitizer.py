from __future__ import annotations

import logging

import pytest

from zipkin_span_converter import sanitize_tag_value


@pytest.mark.parametrize("value,expected", [(True, "true"), (False, "false")])
def test_booleans_are_explicit_literals(value, expected):
    assert sanitize_tag_value(value) == expected


def test_false_is_not_empty_string():
    # str(False) would be "False"; other runtimes produce "" - neither is allowed.
    assert sanitize_tag_value(False) == "false"


def test_numbers_use_decimal_representation():
    assert sanitize_tag_value(42) == "42"
    assert sanitize_tag_value(-7) == "-7"
    assert sanitize_tag_value(1.5) == "1.5"


def test_strings_pass_through():
    assert sanitize_tag_value("GET") == "GET"
    assert sanitize_tag_value("") == ""


def test_list_elements_sanitized_and_joined():
    values = [True, 2, "x"]
    expected = ",".join(sanitize_tag_value(v) for v in values)
    assert sanitize_tag_value(values) == expected == "true,2,x"


def test_tuples_from_sdk_attributes_are_joined():
    # BoundedAttributes stores sequences as tuples.
    assert sanitize_tag_value((False, False)) == "false,false"
    assert sanitize_tag_value((1.25, 3)) == "1.25,3"


def test_empty_list_is_empty_string():
    assert sanitize_tag_value([]) == ""


def test_unstringifiable_value_degrades_to_empty_string():
    class Broken:
        def __str__(self):
            raise RuntimeError("no string for you")

    assert sanitize_tag_value(Broken()) == ""
    assert sanitize_tag_value(["a", Broken(), "b"]) == "a,,b"


def test_arbitrary_objects_use_str():
    class Named:
        def __str__(self):
            return "named"

    assert sanitize_tag_value(Named()) == "named"
    assert sanitize_tag_value(None) == "None"


def test_self_referencing_list_degrades_to_empty_string(caplog):
    nested = ["a"]
    nested.append(nested)
    with caplog.at_level(logging.DEBUG, logger="zipkin_span_converter.mapping.tag_sanitizer"):
        assert sanitize_tag_value(nested) == ""
    assert "nested too deeply" in caplog.text
