"""Adapters package (CLI and user interfaces)."""

__all__ = []
