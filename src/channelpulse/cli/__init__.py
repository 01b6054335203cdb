"""
CLI interface module for channelpulse.

Provides the Typer-based command-line interface for one-off aggregation
and for running the API server.
"""

from __future__ import annotations

__all__: list[str] = []
