"""Command-line interface tools."""

from .assess import assess_file, main

__all__ = [
    "assess_file",
    "main",
]
