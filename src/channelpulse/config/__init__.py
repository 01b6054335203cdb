"""
Configuration management module for channelpulse.

Handles application settings loaded from environment variables.
"""

from __future__ import annotations

__all__: list[str] = []
