"""Input validation for TwinPane's command line and environment.

Checks the optional left/right input files and the requested mode before
the app starts, so problems are reported as a readable message instead of
a traceback from deep inside the UI.
"""

from __future__ import annotations

import os
from pathlib import Path

from .config import config
from .modes import Mode, parse_mode


class ValidationError(Exception):
    """Raised when input validation fails."""

    pass


def validate_file_path(path: str, name: str = "File", must_exist: bool = True, check_readable: bool = True) -> str:
    """Validate an input file path.

    Args:
        path: The file path to validate
        name: Human-readable name for error messages
        must_exist: Whether the file must already exist
        check_readable: Whether to check if file is readable (only if exists)

    Returns:
        Normalized absolute path

    Raises:
        ValidationError: If validation fails
    """
    if not path or not path.strip():
        raise ValidationError(f"{name} cannot be empty")

    path = path.strip()

    if '\x00' in path or any(ord(c) < 32 for c in path if c not in '\t'):
        raise ValidationError(f"{name} contains invalid characters")

    try:
        resolved_path = Path(path).expanduser().resolve()
        abs_path = str(resolved_path)
    except (OSError, ValueError, RuntimeError) as e:
        raise ValidationError(f"{name} is not a valid path: {e}") from e

    if len(abs_path) > config.max_path_length:
        raise ValidationError(f"{name} is too long (max {config.max_path_length} characters)")

    if must_exist:
        if not resolved_path.exists():
            raise ValidationError(f"{name} does not exist: {abs_path}")

        if not resolved_path.is_file():
            raise ValidationError(f"{name} is not a file: {abs_path}")

        if check_readable and not os.access(abs_path, os.R_OK):
            raise ValidationError(f"{name} is not readable: {abs_path}")

    return abs_path


def validate_mode(value: str | None, name: str = "Mode") -> Mode | None:
    """Validate a mode name; returns None for auto-detect.

    Raises:
        ValidationError: If the name is not a known mode
    """
    try:
        return parse_mode(value)
    except ValueError as e:
        choices = ", ".join(["auto"] + [m.value for m in Mode])
        raise ValidationError(f"{name} must be one of {choices}, got: {value}") from e


def validate_session_paths(left_path: str | None = None, right_path: str | None = None) -> tuple[str | None, str | None]:
    """Validate both optional input files at once.

    Returns:
        Tuple of (validated_left_path, validated_right_path)

    Raises:
        ValidationError: If any validation fails
    """
    validated_left = validate_file_path(left_path, "Left input file") if left_path else None
    validated_right = validate_file_path(right_path, "Right input file") if right_path else None
    return validated_left, validated_right
