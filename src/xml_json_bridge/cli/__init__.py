"""Command-line interface module for XML JSON Bridge.

This module provides CLI tools for converting XML files to JSON and for
checking that files convert cleanly.
"""

from .main import main

__all__ = ["main"]
