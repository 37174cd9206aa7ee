"""Synthetic station catalog."""

from .api import Provider

__all__ = ["Provider"]
