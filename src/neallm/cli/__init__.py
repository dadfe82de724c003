"""Command line interface for NeaLLM."""

from .app import app, main

__all__ = ["app", "main"]
