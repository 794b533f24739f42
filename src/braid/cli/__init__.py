"""braid command-line interface."""

from braid.cli.app import app

__all__ = ["app"]
