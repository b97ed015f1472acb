"""Tests for permissive numeric coercion."""

import math

import pytest

from intervention_engine.core.coercion import as_number, format_number, number_map, recs_from


@pytest.mark.parametrize(
    "raw,expected",
    [
        (7, 7),
        (2.5, 2.5),
        ("12", 12),
        (" 3.25 ", 3.25),
        ("4.0", 4),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (True, 0),
        ([1], 0),
        ({"n": 1}, 0),
        (math.nan, 0),
        ("inf", 0),
    ],
)
def test_as_number(raw, expected):
    assert as_number(raw) == expected


def test_as_number_keeps_int_type_for_integral_strings():
    assert isinstance(as_number("12"), int)


def test_as_number_string_forms():
    assert as_number("0x10") == 16
    assert as_number("0b11") == 3
    assert as_number("0o17") == 15
    assert as_number("0x") == 0
    assert as_number("1_000") == 0
    assert as_number("0x1_0") == 0


def test_number_map():
    assert number_map({"a": "2", "b": None, "c": 1.5}) == {"a": 2, "b": 0, "c": 1.5}
    assert number_map(["not", "a", "map"]) == {}


def test_recs_from_is_lenient():
    recs = recs_from([{"title": "A", "rationale": "why"}, "junk", {"title": 3}])

    assert [(r.title, r.rationale) for r in recs] == [("A", "why"), ("", ""), ("", "")]
    assert recs_from(None) == []


def test_format_number():
    assert format_number(20) == "20"
    assert format_number(540.0) == "540"
    assert format_number(2.5) == "2.5"
