"""Clean error display for native binding failures."""

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..binding.errors import BindingError
from ..binding.errors import BindingNotFoundError
from ..binding.errors import LocalLoadError
from ..binding.errors import PackageLoadError
from ..binding.errors import UnsupportedPlatformError
from ..utils.error_format import format_error_message

_TITLES = {
    UnsupportedPlatformError: ("Unsupported Platform", "yellow"),
    LocalLoadError: ("Local Binary Failed To Load", "red"),
    PackageLoadError: ("Platform Package Failed To Load", "red"),
    BindingNotFoundError: ("Native Binding Not Found", "red"),
}


def _title_for(error: BindingError) -> tuple[str, str]:
    for error_type, title in _TITLES.items():
        if isinstance(error, error_type):
            return title
    return ("Native Binding Error", "red")


def display_binding_error(console: Console, error: Exception, platform: str | None = None, verbose: bool = False) -> bool:
    """Display a BindingError with clean Rich formatting.

    Args:
        console: Rich console for output
        error: The error to display
        platform: Platform key string shown above the message
        verbose: If True, also print traceback

    Returns:
        True if error was handled as a BindingError, False if not (caller should handle)
    """
    if not isinstance(error, BindingError):
        return False

    title, border_style = _title_for(error)

    content = Text()
    if platform:
        content.append("Platform: ", style="dim")
        content.append(platform, style="bold cyan")
        content.append("\n\n")

    content.append(str(error) or format_error_message(error), style="white")

    if error.cause is not None:
        content.append("\n\n")
        content.append("── Cause ──", style="dim")
        content.append("\n")
        content.append(format_error_message(error.cause), style="dim")

    console.print()
    console.print(
        Panel(
            content,
            title=f"[bold {border_style}]{title}[/bold {border_style}]",
            border_style=border_style,
            padding=(1, 2),
        )
    )

    console.print(f"[dim]Tip: {_get_binding_error_tip(error)}[/dim]")
    console.print()

    if verbose:
        import sys

        console.print("[dim]─── Traceback ───[/dim]")
        if sys.exc_info()[0] is not None:
            console.print_exception()

    return True


def _get_binding_error_tip(error: BindingError) -> str:
    """Return an actionable tip based on the binding error type."""
    if isinstance(error, UnsupportedPlatformError):
        return f"No prebuilt binary exists for {error.os}/{error.arch}. Build from source for this platform."

    if isinstance(error, LocalLoadError):
        return f"The bundled binary at {error.path} is corrupt or built for another platform. Rebuild or remove it."

    if isinstance(error, PackageLoadError):
        return f"Install the platform package: pip install {error.package_name}"

    return "Reinstall sunny so the binary for this platform is available."
