# ==============================================================================
# CLI Commands Module
# ==============================================================================
"""
CLI commands for the analytics dispatcher.

Commands are organized into separate modules for maintainability:
- shared.py: Colors, icons and logging setup
- config.py: Configuration display
- providers.py: Provider listing
- replay.py: Scripted dispatcher replay
- session.py: Session length estimation
"""

from analytics_dispatcher.cli.shared import C, I, Colors, Icons, configure_logging

__all__ = [
    "C",
    "I",
    "Colors",
    "Icons",
    "configure_logging",
]
