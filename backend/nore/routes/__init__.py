"""Routing helpers."""

from nore.routes.router import NoreRouter, group

__all__ = ["NoreRouter", "group"]
