"""Shared test helpers (spy adapters, fault injection)."""
