"""Utility modules for the merge tool."""

from userdb.utils.logging import setup_logging

__all__ = [
    # Logging
    "setup_logging",
]
