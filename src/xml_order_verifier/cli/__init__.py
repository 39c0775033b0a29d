"""Command-line interface for XML order verification.

This module provides the xml-order-verify tool, which checks files against
their sorted versions with configurable comparison mode and failure policy.
"""

from .main import main

__all__ = ["main"]
