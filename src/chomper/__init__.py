"""Chomper - chomp through your tasks."""

__version__ = "0.3.0"
