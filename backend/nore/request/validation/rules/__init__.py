"""Reusable validation rules."""

from nore.request.validation.rules.starts_with import starts_with

__all__ = ["starts_with"]
