"""Tests for the single-input conversions."""

import pytest

from twinpane.utils.converters import (
    ConversionError,
    base64_decode,
    base64_encode,
    parse_number,
    parse_unix_time,
    pretty_json,
    run_conversion,
    url_decode,
    url_encode,
)
from twinpane.utils.modes import Mode

DEEP_JSON = "[" * 100_000 + "]" * 100_000


class TestPrettyJson:
    def test_formats_with_two_space_indent(self):
        assert pretty_json('{"a":1,"b":[1,2]}') == '{\n  "a": 1,\n  "b": [\n    1,\n    2\n  ]\n}'

    def test_keeps_non_ascii(self):
        assert pretty_json('"café"') == '"café"'

    def test_invalid_json(self):
        with pytest.raises(ConversionError, match="Invalid JSON"):
            pretty_json("{not json")

    def test_deeply_nested_json_is_rejected(self):
        with pytest.raises(ConversionError, match="nested too deeply"):
            pretty_json(DEEP_JSON)


class TestParseUnixTime:
    def test_epoch(self):
        parsed = parse_unix_time("0")
        assert parsed.utc == "Thu, 01 Jan 1970 00:00:00 GMT"
        assert parsed.epoch_ms == 0

    def test_seconds_and_milliseconds_agree(self):
        seconds = parse_unix_time("1700000000")
        millis = parse_unix_time("1700000000000")
        assert seconds.utc == millis.utc == "Tue, 14 Nov 2023 22:13:20 GMT"
        assert seconds.epoch_ms == millis.epoch_ms == 1_700_000_000_000

    def test_local_rendering_names_the_offset(self):
        local = parse_unix_time(" 1700000000 ").local
        assert "GMT" in local
        assert local.endswith(")")

    @pytest.mark.parametrize("text", ["", "yesterday", "12:30"])
    def test_invalid_timestamp(self, text):
        with pytest.raises(ConversionError, match="Invalid timestamp"):
            parse_unix_time(text)

    def test_out_of_range_timestamp(self):
        with pytest.raises(ConversionError):
            parse_unix_time("9" * 30)


class TestParseNumber:
    def test_decimal(self):
        parsed = parse_number("255")
        assert parsed.decimal == "255"
        assert parsed.hex == "0xff"
        assert parsed.octal == "0o377"
        assert parsed.binary == "0b11111111"
        assert parsed.detected_base == 10

    @pytest.mark.parametrize(
        "text,value,base",
        [("0x1F", "31", 16), ("0o17", "15", 8), ("0b101", "5", 2), (" 42 ", "42", 10), ("+7", "7", 10)],
    )
    def test_prefixed_bases(self, text, value, base):
        parsed = parse_number(text)
        assert parsed.decimal == value
        assert parsed.detected_base == base

    def test_negative_numbers(self):
        parsed = parse_number("-0b101")
        assert parsed.decimal == "-5"
        assert parsed.hex == "-0x5"
        assert parsed.binary == "-0b101"

    @pytest.mark.parametrize("text", ["", "abc", "12abc", "0x", "1_000", "--5", "0b102"])
    def test_invalid_numbers(self, text):
        with pytest.raises(ConversionError, match="Invalid number"):
            parse_number(text)

    @pytest.mark.parametrize("text", ["0x" + "f" * 5000, "9" * 5000, "-0b" + "1" * 20_000])
    def test_oversized_numbers(self, text):
        with pytest.raises(ConversionError, match="too many digits"):
            parse_number(text)

    def test_large_number_within_limit(self):
        parsed = parse_number("0x" + "f" * 3000)
        assert parsed.hex == "0x" + "f" * 3000
        assert parsed.decimal == str(16**3000 - 1)


class TestUrlCoding:
    def test_encode_like_uri_component(self):
        assert url_encode("a b&c=d/é") == "a%20b%26c%3Dd%2F%C3%A9"
        assert url_encode("it's (ok)!~*") == "it's%20(ok)!~*"

    def test_decode(self):
        assert url_decode("a%20b%26c") == "a b&c"
        assert url_decode("caf%C3%A9") == "café"

    @pytest.mark.parametrize("text", ["100%", "%zz", "%ff"])
    def test_decode_rejects_malformed(self, text):
        with pytest.raises(ConversionError, match="Invalid URL encoding"):
            url_decode(text)


class TestBase64Coding:
    def test_encode(self):
        assert base64_encode("hello") == "aGVsbG8="
        assert base64_encode("") == ""

    def test_decode_ignores_whitespace(self):
        assert base64_decode("aGVs\nbG8=") == "hello"

    @pytest.mark.parametrize("text", ["!!!!", "aGVsbG8", "/w=="])
    def test_decode_rejects_bad_input(self, text):
        with pytest.raises(ConversionError, match="Invalid base64"):
            base64_decode(text)


class TestRunConversion:
    def test_number_rows_dim_the_detected_base(self):
        result = run_conversion(Mode.NUMBER, "0x10")
        assert result.ok
        assert [(row.label, row.value, row.dimmed) for row in result.rows] == [
            ("Decimal", "16", False),
            ("Hex", "0x10", True),
            ("Octal", "0o20", False),
            ("Binary", "0b10000", False),
        ]

    def test_unix_rows(self):
        result = run_conversion(Mode.UNIX_TIME, "0")
        assert [row.label for row in result.rows] == ["Local", "UTC"]

    @pytest.mark.parametrize(
        "mode,text,expected",
        [
            (Mode.URL_ENCODE, "a b", "a%20b"),
            (Mode.URL_DECODE, "a%20b", "a b"),
            (Mode.BASE64_ENCODE, "hi", "aGk="),
            (Mode.BASE64_DECODE, "aGk=", "hi"),
        ],
    )
    def test_single_row_modes(self, mode, text, expected):
        result = run_conversion(mode, text)
        assert len(result.rows) == 1
        assert result.rows[0].value == expected

    def test_rejected_input_becomes_error(self):
        result = run_conversion(Mode.JSON, "{")
        assert not result.ok
        assert result.rows == []
        assert result.error.startswith("Invalid JSON")

    @pytest.mark.parametrize(
        "mode,text,prefix",
        [
            (Mode.NUMBER, "0x" + "f" * 5000, "Invalid number"),
            (Mode.JSON, DEEP_JSON, "Invalid JSON"),
        ],
    )
    def test_oversized_input_becomes_error(self, mode, text, prefix):
        result = run_conversion(mode, text)
        assert not result.ok
        assert result.error.startswith(prefix)

    def test_diff_is_not_a_conversion(self):
        with pytest.raises(ValueError):
            run_conversion(Mode.DIFF, "x")
