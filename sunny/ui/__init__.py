"""Terminal UI helpers for the sunny CLI."""

from .error_display import display_binding_error

__all__ = ["display_binding_error"]
