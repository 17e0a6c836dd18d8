"""Shared helpers for the sunny CLI."""
