"""
CLI interface module for mediatag.

Provides a Typer-based command-line interface for running the API server
and for trying out filename capture and tag normalization offline.
"""

from __future__ import annotations

__all__: list[str] = []
