from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .error_handling import log_file_error
from .logger import log


@dataclass
class FileReadResult:
    """Outcome of loading a comparison input from disk."""
    success: bool
    content: str = ""
    encoding: str = ""
    error_message: str = ""


DEFAULT_ENCODINGS: tuple[str, ...] = (
    "utf-8",
    "utf-8-sig",
    "cp1252",
    "latin-1",
)


def read_text(path: str, encodings: Iterable[str] = DEFAULT_ENCODINGS) -> tuple[str, str]:
    """
    Read a text file trying multiple encodings in order.

    Returns (text, used_encoding). Newlines are normalized to ``\\n`` by the
    text layer so CRLF files line up with pasted text. ``OSError`` propagates.
    If every encoding fails strictly, the last one is retried with
    errors="ignore" and the encoding is reported as ``"<enc>+ignore"``.
    """
    last_enc = None
    for enc in encodings:
        last_enc = enc
        try:
            with open(path, encoding=enc) as f:
                return f.read(), enc
        except UnicodeDecodeError:
            continue
    if last_enc is None:
        raise ValueError("no encodings to try")
    with open(path, encoding=last_enc, errors="ignore") as f:
        log.warning(f"[IO] Decoded with ignore: {path} ({last_enc})")
        return f.read(), f"{last_enc}+ignore"


def safe_read_file(file_path: str | None, default_content: str = "") -> FileReadResult:
    """Read a file for comparison without ever raising to the caller.

    Args:
        file_path: Path to the file to read
        default_content: Content to report on error (default: empty string)

    Returns:
        FileReadResult with success status, content, and error details
    """
    if not file_path:
        return FileReadResult(success=False, content=default_content, error_message="No file path provided")

    try:
        content, encoding = read_text(file_path)
    except (OSError, ValueError) as e:
        log_file_error(file_path, "reading", e)
        return FileReadResult(
            success=False,
            content=default_content,
            error_message=f"Error reading {file_path}: {e}",
        )

    log.debug(f"[IO] Read {len(content)} chars from {file_path} ({encoding})")
    return FileReadResult(success=True, content=content, encoding=encoding)
