"""sunny CLI - diagnostics for native binding resolution."""

import logging
import sys

import click
from rich.table import Table

from .binding import BindingError
from .binding import NativeBindingResolver
from .console import console
from .logging_setup import init_json_logging
from .settings import SettingsManager
from .settings import SunnySettings
from .ui.error_display import display_binding_error
from .utils.error_format import escape_markup

logger = logging.getLogger(__name__)


def create_resolver(settings: SunnySettings) -> NativeBindingResolver:
    """Build a resolver from settings (fresh, not the process-wide slot)."""
    return NativeBindingResolver(
        binding_dir=settings.binding.directory,
        product=settings.binding.product,
    )


@click.group()
@click.version_option(package_name="sunny")
@click.option("--log-level", default=None, help="Log level for the JSONL log (default from settings)")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """sunny - inspect how the native binding is resolved on this machine."""
    settings = SettingsManager().load()
    init_json_logging(settings.logging.path, log_level or settings.logging.level)
    ctx.obj = settings


@cli.command("platform")
@click.pass_obj
def platform_cmd(settings: SunnySettings):
    """Show the detected platform key."""
    key = create_resolver(settings).platform_key

    table = Table(title="Detected Platform", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value", style="cyan")
    table.add_row("OS", key.os)
    table.add_row("Architecture", key.arch)
    table.add_row("libc", key.libc or "[dim]n/a[/dim]")
    console.print(table)


@cli.command("candidates")
@click.pass_obj
def candidates_cmd(settings: SunnySettings):
    """List candidate binaries in the order they are tried."""
    resolver = create_resolver(settings)
    candidates = []
    unsupported: BindingError | None = None
    try:
        for candidate in resolver.iter_candidates():
            candidates.append(candidate)
    except BindingError as e:
        if not candidates:
            display_binding_error(console, e, platform=str(resolver.platform_key))
            sys.exit(1)
        unsupported = e

    table = Table(title=f"Candidates for {resolver.platform_key}", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim")
    table.add_column("Local file", style="green")
    table.add_column("Present", style="yellow")
    table.add_column("Package", style="magenta")

    for i, candidate in enumerate(candidates, start=1):
        present = "yes" if resolver.local_path(candidate).is_file() else "no"
        table.add_row(str(i), candidate.local_file_name, present, candidate.package_name)

    console.print(table)
    if unsupported is not None:
        console.print(f"[yellow]No per-arch binary: {escape_markup(str(unsupported))}[/yellow]")
    console.print(f"[dim]Local binaries are searched in {escape_markup(resolver.binding_dir)}[/dim]")


@cli.command("check")
@click.option("--verbose", "-v", is_flag=True, help="Show traceback on failure")
@click.pass_obj
def check_cmd(settings: SunnySettings, verbose: bool):
    """Resolve and load the binding, reporting where it came from."""
    resolver = create_resolver(settings)
    try:
        handle, tier = resolver.resolve_with_tier()
    except BindingError as e:
        logger.error(f"Binding check failed: {e}")
        display_binding_error(console, e, platform=str(resolver.platform_key), verbose=verbose)
        sys.exit(1)

    console.print(f"[green]✓ Loaded {handle.candidate.suffix}[/green]")
    console.print(f"  Tier: {tier.value}")
    console.print(f"  Source: {escape_markup(handle.origin)}")

    operations = handle.operations()
    console.print(f"  Operations: {', '.join(operations) or '[yellow]none[/yellow]'}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
