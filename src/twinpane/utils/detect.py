"""Guess which tool mode fits pasted text.

Each ``looks_like_*`` predicate is an independent, cheap classifier.
``detect_mode`` tries them in a fixed order and falls back to a text diff.
"""

from __future__ import annotations

import base64
import binascii
import json
import re

from .modes import Mode

_TIMESTAMP = re.compile(r"\d{9,13}(?:\.\d+)?")
_INTEGER = re.compile(r"[+-]?(?:0x[0-9a-f]+|0o[0-7]+|0b[01]+|\d+)", re.IGNORECASE)
_PERCENT_ESCAPE = re.compile(r"%[0-9A-Fa-f]{2}")
_BASE64 = re.compile(r"[A-Za-z0-9+/]+={0,2}")
_MIN_BASE64_LENGTH = 8


def looks_like_json(text: str) -> bool:
    stripped = text.strip()
    if not stripped or stripped[0] not in "{[":
        return False
    try:
        json.loads(stripped)
    except (ValueError, RecursionError):
        return False
    return True


def looks_like_timestamp(text: str) -> bool:
    """9 to 13 digits covers seconds and milliseconds from 1973 well into the future."""
    return _TIMESTAMP.fullmatch(text.strip()) is not None


def looks_like_number(text: str) -> bool:
    return _INTEGER.fullmatch(text.strip()) is not None


def looks_like_url_encoded(text: str) -> bool:
    stripped = text.strip()
    return bool(stripped) and " " not in stripped and _PERCENT_ESCAPE.search(stripped) is not None


def looks_like_base64(text: str) -> bool:
    stripped = text.strip()
    if len(stripped) < _MIN_BASE64_LENGTH or len(stripped) % 4:
        return False
    if not _BASE64.fullmatch(stripped):
        return False
    try:
        decoded = base64.b64decode(stripped, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return False
    return all(ch.isprintable() or ch in "\n\r\t" for ch in decoded)


_DETECTORS = (
    (looks_like_json, Mode.JSON),
    (looks_like_timestamp, Mode.UNIX_TIME),
    (looks_like_number, Mode.NUMBER),
    (looks_like_url_encoded, Mode.URL_DECODE),
    (looks_like_base64, Mode.BASE64_DECODE),
)


def detect_mode(text_a: str, text_b: str = "") -> Mode:
    """Pick a mode for the current inputs.

    Anything in input B means the user wants a comparison. Otherwise input A
    is classified; unrecognized text stays in diff mode.
    """
    if text_b.strip() or not text_a.strip():
        return Mode.DIFF
    for predicate, mode in _DETECTORS:
        if predicate(text_a):
            return mode
    return Mode.DIFF
