"""Logging utilities for farmplanner editors.

Provides color-coded console output so placement decisions, successful
mutations, and rejected drops are easy to tell apart while editing.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for operation types
    BLUE = "\033[94m"      # Validation and drag transitions
    RED = "\033[91m"       # Rejections and failures
    GREEN = "\033[92m"     # Committed mutations
    CYAN = "\033[96m"      # Info/metadata
    YELLOW = "\033[93m"    # Warnings (missing data files, listener failures)

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if FARMPLANNER_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("FARMPLANNER_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def debug_enabled(flag: str) -> bool:
    """Return True when the named environment flag is set to a truthy value."""
    return os.getenv(flag, "").lower() in ("1", "true", "yes")


def log_deterministic(message: str) -> None:
    """Log a validation or state transition (blue)."""
    print(colored(message, Color.BLUE))


def log_warning(message: str) -> None:
    """Log a recoverable problem (yellow)."""
    print(colored(message, Color.YELLOW))


def log_error(message: str) -> None:
    """Log a rejection or failure (red)."""
    print(colored(message, Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(message, Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(message, Color.CYAN))


# Markers for operation types (color-blind accessible)
LOG_TAG_DETERMINISTIC = "[•]"  # Validation / drag transition
LOG_TAG_WARNING = "[?]"        # Recoverable problem
LOG_TAG_ERROR = "[!]"          # Rejection / failure
LOG_TAG_SUCCESS = "[✓]"        # Committed mutation
LOG_TAG_INFO = "[i]"           # Information
