"""Command line interface for pomtrace."""

from .main import main

__all__ = ["main"]
