"""FastAPI demo server exercising the corsgate middleware."""

from .app import create_app

__all__ = ["create_app"]
