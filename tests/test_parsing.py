import pytest

from cmdmanager.model import Frame
from cmdmanager.parsing import (
    format_value,
    parse_float,
    parse_int,
    split_frame,
    tokenize_parameters,
)


@pytest.mark.parametrize("message", ["", "#", "RUN_NO____123", "SHORT#", "RUN_NO____", "RUN_NO___#"])
def test_split_frame_rejects_unterminated_or_short(message):
    assert split_frame(message) is None


def test_split_frame_minimum_length_has_empty_payload():
    frame = split_frame("HISTORY___#")
    assert frame == Frame(opcode_text="HISTORY___", payload="")


def test_split_frame_strips_only_one_terminator():
    frame = split_frame("USR_MSG___hi##")
    assert frame.opcode_text == "USR_MSG___"
    assert frame.payload == "hi#"


def test_split_frame_keeps_payload_whitespace():
    assert split_frame("USR_MSG___ spaced out #").payload == " spaced out "


@pytest.mark.parametrize("text, expected", [("123", 123), ("-7", -7), ("+42", 42), ("0", 0)])
def test_parse_int_accepts_signed_integers(text, expected):
    result = parse_int(text)
    assert result.ok
    assert result.value == expected


@pytest.mark.parametrize("text", ["", "ABC", "12a", "1.5", " 12", "12 ", "1_000", "-", "2147483648"])
def test_parse_int_rejects_partial_or_out_of_range(text):
    result = parse_int(text)
    assert not result.ok
    assert result.value is None
    assert result.error


def test_parse_int_bounds():
    assert parse_int("2147483647").value == 2147483647
    assert parse_int("-2147483648").value == -2147483648


@pytest.mark.parametrize(
    "text, expected",
    [("0.004947", 0.004947), ("-1", -1.0), ("3.", 3.0), (".5", 0.5), ("1e-3", 0.001)],
)
def test_parse_float_accepts_decimals(text, expected):
    result = parse_float(text)
    assert result.ok
    assert result.value == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "abc", "1.0x", "nan", "inf", "1e999", " 1.0", "1,0"])
def test_parse_float_rejects_non_numbers(text):
    assert not parse_float(text).ok


def test_tokenize_drops_empty_segments():
    assert tokenize_parameters("a,1,,b,2,") == ["a", "1", "b", "2"]
    assert tokenize_parameters("") == []
    assert tokenize_parameters(",,,") == []


def test_format_value_uses_six_significant_digits():
    assert format_value(0.004947) == "0.004947"
    assert format_value(0.12343044) == "0.12343"
    assert format_value(1.12345) == "1.12345"
    assert format_value(5.0) == "5"
