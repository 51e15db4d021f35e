# ==============================================================================
# Base Abstract Classes
# ==============================================================================
"""
Contracts between the dispatcher and analytics providers.

The dispatcher accepts anything satisfying the Provider protocol. BaseProvider
is the shared implementation used by the bundled providers.
"""

from analytics_dispatcher.base.provider import BaseProvider, Provider

__all__ = [
    "BaseProvider",
    "Provider",
]
