"""Routers module - FastAPI route handlers"""

from . import changes, config

__all__ = ["changes", "config"]
