"""Nore — FastAPI backend toolkit: request validation, route groups, mail notifications."""

__version__ = "1.0.0"
