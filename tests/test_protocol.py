from __future__ import annotations

import logging

import pytest

from movementrelay.exceptions import RelayFormatError, RelayNumericParseError
from movementrelay.models import Vector3
from movementrelay.protocol import information_payload, movement_topic, parse, should_process, validate


@pytest.mark.parametrize(
    "raw",
    [
        "(1, 2, 3)",
        "(1,2,3)",
        "( -1.5 ,+2., .25 )",
        "(1,,3)",
        "(,,)",
        "(.,.,.)",
        "prefix (1,2,3) suffix",
    ],
)
def test_validate_accepts_coordinate_triples(raw: str) -> None:
    assert validate(raw) is True


@pytest.mark.parametrize(
    "raw",
    [
        "1,2,3",
        "(1,2)",
        "(1,2,3,4)",
        "(a,b,c)",
        "",
        "(1;2;3)",
    ],
)
def test_validate_rejects_malformed_messages(raw: str) -> None:
    assert validate(raw) is False


def test_validate_is_a_pure_predicate() -> None:
    assert validate("(1, 2, 3)") == validate("(1, 2, 3)")
    assert validate("1,2,3") == validate("1,2,3")


def test_parse_returns_exact_components() -> None:
    assert parse("(1,2,3)") == Vector3(x=1, y=2, z=3)
    assert parse("(-1.5, +2.25, 0.125)") == Vector3(x=-1.5, y=2.25, z=0.125)


def test_parse_empty_fields_resolve_to_zero() -> None:
    assert parse("(1,,3)") == Vector3(x=1, y=0, z=3)
    assert parse("(,,)") == Vector3.zero()
    assert parse("( 1 , , 3 )") == Vector3(x=1, y=0, z=3)


def test_parse_trims_surrounding_whitespace_and_parentheses() -> None:
    assert parse("  ( 1.5 , -2 , +.5 )\n") == Vector3(x=1.5, y=-2, z=0.5)
    assert parse("((1,2,3))") == Vector3(x=1, y=2, z=3)


def test_parse_wrong_field_count_logs_and_returns_zero(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="movementrelay.protocol"):
        assert parse("(1,2)") == Vector3.zero()
        assert parse("(1,2,3) (4,5,6)") == Vector3.zero()

    messages = [record.getMessage() for record in caplog.records]
    assert "Invalid message format: (1,2)" in messages
    assert "Invalid message format: (1,2,3) (4,5,6)" in messages


def test_parse_lone_dot_raises_numeric_error() -> None:
    with pytest.raises(RelayNumericParseError) as excinfo:
        parse("(.,1,2)")

    assert excinfo.value.field == "."
    assert excinfo.value.raw == "(.,1,2)"
    # Numeric failures are a kind of format failure.
    assert isinstance(excinfo.value, RelayFormatError)


def test_parse_garbage_around_triple_raises_numeric_error() -> None:
    with pytest.raises(RelayNumericParseError):
        parse("xx(1,2,3)yy")


@pytest.mark.parametrize(
    ("arrival", "previous", "expected"),
    [
        (0.05, 0.0, False),
        (0.10, 0.0, True),
        (0.1000001, 0.0, True),
        (5.0, 4.95, False),
        (5.0, 4.5, True),
    ],
)
def test_should_process(arrival: float, previous: float, expected: bool) -> None:
    assert should_process(arrival, previous, 0.1) is expected


def test_movement_topic_uses_vector_text_form() -> None:
    assert movement_topic(Vector3(x=1, y=2, z=3)) == "(1, 2, 3)"
    assert movement_topic(Vector3(x=0.5, y=-1, z=0)) == "(0.5, -1, 0)"


def test_information_payload_formats_both_positions() -> None:
    payload = information_payload(Vector3.zero(), Vector3(x=1, y=2.5, z=-3))
    assert payload == "I have moved from (X: 0, Y: 0, Z: 0) to (X: 1, Y: 2.5, Z: -3)"


def test_non_ascii_digits_are_not_coordinates() -> None:
    assert validate("(٣,٢,١)") is False
    assert validate("(1,\u00a02,3)") is False

    with pytest.raises(RelayNumericParseError):
        parse("(٣,٢,١)")
