"""Inbound adapters - entry points that drive the application.

Exports:
    - main: Command-line demo entry point
"""

from table_engine.adapters.inbound.cli import main

__all__ = ["main"]
