"""Accessibility report generation engine."""

__version__ = "1.0.0"
