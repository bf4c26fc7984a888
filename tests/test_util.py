import pytest

from triplclust.util import parse_number


def test_surrounding_whitespace_is_ignored():
    assert parse_number("  3.5\n") == 3.5
    assert parse_number("\t-7\r\n") == -7.0


def test_exponent_and_sign():
    assert parse_number("1e3") == 1000.0
    assert parse_number("+4") == 4.0


def test_leading_dot():
    assert parse_number(".5") == 0.5


@pytest.mark.parametrize("value", [0.0, -2.25, 1e-7, 123456.789, 42.0])
def test_round_trip_through_repr(value):
    assert parse_number(repr(value)) == value


@pytest.mark.parametrize("text", ["abc", "", "   ", "1.5x", "1 2", "dnn", "--1"])
def test_invalid_input_raises(text):
    with pytest.raises(ValueError, match="not a number"):
        parse_number(text)