# ==============================================================================
# Shared Utilities for CLI Commands
# ==============================================================================
"""
Shared utilities and constants used across CLI command modules.

This module provides:
- ANSI color codes and status icons
- Logging setup for commands that dispatch events
"""

import logging

from analytics_dispatcher.utils.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ==============================================================================
# ANSI Colors and Icons
# ==============================================================================


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"

    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"


class Icons:
    """Status icons using Unicode symbols."""

    CHECK = "✓"
    CROSS = "✗"
    WARN = "!"
    BULLET = "•"
    ARROW = "→"


# Short aliases
C = Colors
I = Icons  # noqa: E741


# ==============================================================================
# Logging
# ==============================================================================


def configure_logging(level: str | None = None) -> None:
    """
    Configure root logging for CLI commands.

    Args:
        level: Logging level name. If None, uses settings.log_level.
    """
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
    # Suppress noisy third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
