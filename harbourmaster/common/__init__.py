"""Shared helpers used across the registry and backend packages."""
