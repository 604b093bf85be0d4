"""Single-input format conversions shown in the right-hand pane.

Each converter takes the raw text of input A and either returns a value or
raises ``ConversionError`` with a short human label ("Invalid JSON: ...").
``run_conversion`` turns that into display rows or an inline error message.
"""

from __future__ import annotations

import base64
import binascii
import json
import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, NamedTuple, Optional
from urllib.parse import quote, unquote

from .error_handling import log_conversion_error
from .modes import Mode

# Values above this are taken to be milliseconds rather than seconds
MILLISECONDS_THRESHOLD = 100_000_000_000

# About 3900 decimal digits
MAX_NUMBER_BITS = 13_000

# Characters encodeURIComponent leaves alone besides letters, digits and "_.-"
_URI_COMPONENT_SAFE = "!~*'()"
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_BASE64_TEXT = re.compile(r"[A-Za-z0-9+/]*={0,2}")
_NUMBER_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}


class ConversionError(Exception):
    """Raised when input text cannot be converted in the requested mode."""

    pass


class UnixTime(NamedTuple):
    local: str
    utc: str
    epoch_ms: float


class NumberConversion(NamedTuple):
    decimal: str
    hex: str
    octal: str
    binary: str
    detected_base: int


@dataclass
class ResultRow:
    """One labeled output line; ``dimmed`` marks the row echoing the input."""

    label: str
    value: str
    dimmed: bool = False


@dataclass
class ConversionResult:
    """Rows to display, or an inline error message when the input was rejected."""

    mode: Mode
    rows: list[ResultRow] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def pretty_json(text: str, indent: int = 2) -> str:
    try:
        parsed = json.loads(text)
        return json.dumps(parsed, indent=indent, ensure_ascii=False)
    except json.JSONDecodeError as e:
        raise ConversionError(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise ConversionError("Invalid JSON: nested too deeply") from e


def parse_unix_time(text: str) -> UnixTime:
    """Interpret ``text`` as a Unix timestamp in seconds, or milliseconds if it is large."""
    stripped = text.strip()
    try:
        value = float(stripped)
    except ValueError as e:
        raise ConversionError(f"Invalid timestamp: {stripped!r}") from e

    epoch_ms = value if value > MILLISECONDS_THRESHOLD else value * 1000
    try:
        utc = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
        local = utc.astimezone()
    except (OverflowError, OSError, ValueError) as e:
        raise ConversionError(f"Invalid timestamp: {e}") from e

    return UnixTime(
        local=f"{local.strftime('%a %b %d %Y %H:%M:%S GMT%z')} ({local.tzname()})",
        utc=utc.strftime("%a, %d %b %Y %H:%M:%S GMT"),
        epoch_ms=epoch_ms,
    )


def _signed(prefix: str, value: int, digits: str) -> str:
    return f"-{prefix}{digits}" if value < 0 else f"{prefix}{digits}"


def parse_number(text: str) -> NumberConversion:
    """Parse an integer written in base 10 or with a 0x/0o/0b prefix."""
    stripped = text.strip()
    body = stripped.lower()
    negative = body.startswith("-")
    if body.startswith(("+", "-")):
        body = body[1:]

    base = 10
    prefix = body[:2]
    if prefix in _NUMBER_PREFIXES:
        base = _NUMBER_PREFIXES[prefix]
        body = body[2:]

    # int() would also accept separators and a second sign
    if not body or "_" in body or body.startswith(("+", "-")):
        raise ConversionError(f"Invalid number: {stripped!r}")
    # Keeps the decimal form under the interpreter's int-to-str digit limit
    if len(body) * math.log2(base) > MAX_NUMBER_BITS:
        raise ConversionError("Invalid number: too many digits")
    try:
        value = int(body, base)
    except ValueError as e:
        raise ConversionError(f"Invalid number: {stripped!r}") from e
    if negative:
        value = -value

    magnitude = abs(value)
    return NumberConversion(
        decimal=str(value),
        hex=_signed("0x", value, format(magnitude, "x")),
        octal=_signed("0o", value, format(magnitude, "o")),
        binary=_signed("0b", value, format(magnitude, "b")),
        detected_base=base,
    )


def url_encode(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def url_decode(text: str) -> str:
    if _BAD_PERCENT_ESCAPE.search(text):
        raise ConversionError("Invalid URL encoding: malformed % escape")
    try:
        return unquote(text, errors="strict")
    except UnicodeDecodeError as e:
        raise ConversionError(f"Invalid URL encoding: {e}") from e


def base64_encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def base64_decode(text: str) -> str:
    compact = "".join(text.split())
    if not _BASE64_TEXT.fullmatch(compact):
        raise ConversionError("Invalid base64: unexpected characters")
    try:
        raw = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ConversionError(f"Invalid base64: {e}") from e
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ConversionError("Invalid base64: decoded bytes are not UTF-8 text") from e


def _json_rows(text: str) -> list[ResultRow]:
    return [ResultRow("JSON", pretty_json(text))]


def _unix_rows(text: str) -> list[ResultRow]:
    parsed = parse_unix_time(text)
    return [ResultRow("Local", parsed.local), ResultRow("UTC", parsed.utc)]


def _number_rows(text: str) -> list[ResultRow]:
    parsed = parse_number(text)
    return [
        ResultRow("Decimal", parsed.decimal, dimmed=parsed.detected_base == 10),
        ResultRow("Hex", parsed.hex, dimmed=parsed.detected_base == 16),
        ResultRow("Octal", parsed.octal, dimmed=parsed.detected_base == 8),
        ResultRow("Binary", parsed.binary, dimmed=parsed.detected_base == 2),
    ]


_CONVERTERS: dict[Mode, Callable[[str], list[ResultRow]]] = {
    Mode.JSON: _json_rows,
    Mode.UNIX_TIME: _unix_rows,
    Mode.NUMBER: _number_rows,
    Mode.URL_ENCODE: lambda text: [ResultRow("Encoded", url_encode(text))],
    Mode.URL_DECODE: lambda text: [ResultRow("Decoded", url_decode(text))],
    Mode.BASE64_ENCODE: lambda text: [ResultRow("Encoded", base64_encode(text))],
    Mode.BASE64_DECODE: lambda text: [ResultRow("Decoded", base64_decode(text))],
}


def run_conversion(mode: Mode, text: str) -> ConversionResult:
    """Convert ``text`` for display in ``mode``; rejected input becomes ``result.error``.

    Raises:
        ValueError: if ``mode`` is not a conversion mode (e.g. ``Mode.DIFF``)
    """
    converter = _CONVERTERS.get(mode)
    if converter is None:
        raise ValueError(f"{mode!r} is not a conversion mode")
    try:
        return ConversionResult(mode=mode, rows=converter(text))
    except ConversionError as e:
        log_conversion_error(mode.value, text, e)
        return ConversionResult(mode=mode, error=str(e))
