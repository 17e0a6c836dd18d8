"""Safe error message formatting utilities.

Ensures exceptions always have useful display messages, even when
their str() representation is empty (a bare ImportError or OSError
raised by a native initializer, for example).
"""

from __future__ import annotations

from rich.markup import escape as _escape_markup

# Friendly messages for exception types that often arrive without text.
# Ordered most specific first; the first isinstance match wins.
FRIENDLY_MESSAGES: dict[type, str] = {
    ModuleNotFoundError: "The platform package is not installed.",
    ImportError: "The native binary could not be initialized by this interpreter.",
    PermissionError: "Permission denied while reading the native binary.",
    FileNotFoundError: "The native binary disappeared before it could be loaded.",
    OSError: "The operating system refused to load the native binary.",
}


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Format an exception into a useful display message.

    Args:
        e: The exception to format
        include_type: Whether to include the exception type name

    Returns:
        A non-empty, user-friendly error message

    Examples:
        >>> format_error_message(ImportError())
        'ImportError: The native binary could not be initialized by this interpreter.'

        >>> format_error_message(ValueError("invalid input"), include_type=False)
        'invalid input'
    """
    error_str = str(e)
    error_type = type(e).__name__

    if error_str:
        if include_type and error_type not in error_str:
            return f"{error_type}: {error_str}"
        return error_str

    for exc_type, friendly_msg in FRIENDLY_MESSAGES.items():
        if isinstance(e, exc_type):
            return f"{error_type}: {friendly_msg}"

    return f"{error_type}: (no additional details)"


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings.

    Binding paths and loader messages routinely contain square brackets.
    """
    return _escape_markup(str(value))
