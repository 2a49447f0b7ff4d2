"""
Request handlers.

    static.py    StaticFileHandler - the per-connection request pipeline
"""

from .static import StaticFileHandler

__all__ = ["StaticFileHandler"]
