"""Braid HTTP transport (FastAPI)."""

from braid.api.app import create_app

__all__ = ["create_app"]
