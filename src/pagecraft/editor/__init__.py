"""Editing session over one document."""

from .session import EditorSession, Listener

__all__ = ["EditorSession", "Listener"]
