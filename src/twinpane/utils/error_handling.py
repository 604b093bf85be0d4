"""Standardized error logging helpers for TwinPane.

Every helper formats its message as ``[PREFIX] Failed <operation> ...:
<ExceptionType>: <exception>`` so log files stay greppable across the
file, UI, watcher and conversion code paths.
"""

from .logger import log


def log_file_error(file_path: str, operation: str, exception: Exception) -> None:
    """Log file operation errors with consistent formatting.

    Args:
        file_path: Path to the file that caused the error
        operation: Description of the operation (e.g., "reading", "watching")
        exception: The exception that was raised
    """
    error_type = type(exception).__name__
    log.error(f"[IO] Failed {operation} {file_path}: {error_type}: {exception}")


def log_ui_error(component: str, action: str, exception: Exception) -> None:
    """Log UI component errors with consistent formatting.

    Args:
        component: Name of the UI component (e.g., "mode select", "diff view")
        action: The action being performed (e.g., "setting focus", "updating")
        exception: The exception that was raised
    """
    error_type = type(exception).__name__
    log.error(f"[UI] Failed {action} on {component}: {error_type}: {exception}")


def log_watchdog_error(path: str, operation: str, exception: Exception) -> None:
    """Log file watching errors with consistent formatting.

    Args:
        path: Path being watched
        operation: The operation being performed (e.g., "starting observer")
        exception: The exception that was raised
    """
    error_type = type(exception).__name__
    log.error(f"[WATCHDOG] Failed {operation} for {path}: {error_type}: {exception}")


def log_conversion_error(mode: str, text: str, exception: Exception) -> None:
    """Log a rejected conversion input.

    Conversion failures are expected while the user is still typing, so they
    are logged at DEBUG level with a short preview of the input.

    Args:
        mode: The conversion mode value (e.g., "json", "base64-decode")
        text: The input that failed to convert
        exception: The exception that was raised
    """
    error_type = type(exception).__name__
    preview = text if len(text) <= 40 else text[:40] + "…"
    log.debug(f"[CONVERT] Failed {mode} on {preview!r}: {error_type}: {exception}")
