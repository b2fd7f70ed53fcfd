"""Storage modules for LinkSafety."""

from .last_check import LastCheckStore

__all__ = ["LastCheckStore"]
