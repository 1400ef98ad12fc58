"""Structured commit message validation for git repositories."""

__version__ = "1.0.0"
