"""
Graph Editor Backend - HTTP surface and editing session for the graph core.
"""

from .config import Settings, configure_logging
from .session import GraphSession

__all__ = [
    "Settings",
    "configure_logging",
    "GraphSession",
]
