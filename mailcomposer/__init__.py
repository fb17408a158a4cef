"""Compose and send a single email from a line-based parameter file."""

__version__ = "1.0.0"
