"""Tool modes offered by the right-hand pane."""

from __future__ import annotations

from enum import Enum

AUTO = "auto"


class Mode(str, Enum):
    """What to do with the inputs: diff A against B, or convert A."""

    DIFF = "diff"
    JSON = "json"
    UNIX_TIME = "unix"
    NUMBER = "number"
    URL_ENCODE = "url-encode"
    URL_DECODE = "url-decode"
    BASE64_ENCODE = "base64-encode"
    BASE64_DECODE = "base64-decode"


MODE_LABELS: dict[Mode, str] = {
    Mode.DIFF: "Text diff",
    Mode.JSON: "JSON pretty print",
    Mode.UNIX_TIME: "Unix time",
    Mode.NUMBER: "Number conversion",
    Mode.URL_ENCODE: "URL encode",
    Mode.URL_DECODE: "URL decode",
    Mode.BASE64_ENCODE: "Base64 encode",
    Mode.BASE64_DECODE: "Base64 decode",
}


def parse_mode(value: str | None) -> Mode | None:
    """Turn a CLI/env mode string into a Mode; ``None``, "" and "auto" mean auto-detect.

    Raises:
        ValueError: for an unknown mode name
    """
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in ("", AUTO):
        return None
    return Mode(normalized)


def mode_choices() -> list[str]:
    """All accepted mode names, auto first."""
    return [AUTO] + [m.value for m in Mode]
