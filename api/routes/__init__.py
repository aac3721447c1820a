"""API route handlers."""

from api.routes import anchors, commit, health, statements, verify

__all__ = ["anchors", "commit", "health", "statements", "verify"]
