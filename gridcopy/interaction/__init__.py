"""Pointer interaction modules."""

from .hover import HoverCallbacks, HoverTracker
from .urls import is_url

__all__ = [
    "HoverCallbacks",
    "HoverTracker",
    "is_url",
]
