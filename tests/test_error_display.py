"""Tests for binding error formatting and Rich panels."""

import io
from pathlib import Path

from rich.console import Console

from sunny.binding.errors import BindingNotFoundError
from sunny.binding.errors import LocalLoadError
from sunny.binding.errors import PackageLoadError
from sunny.binding.errors import UnsupportedPlatformError
from sunny.ui.error_display import display_binding_error
from sunny.utils.error_format import escape_markup
from sunny.utils.error_format import format_error_message


def _console():
    return Console(file=io.StringIO(), width=120, force_terminal=False)


class TestFormatErrorMessage:
    def test_message_with_type(self):
        assert format_error_message(ValueError("bad")) == "ValueError: bad"

    def test_type_not_repeated(self):
        assert format_error_message(ValueError("ValueError: bad")) == "ValueError: bad"

    def test_without_type(self):
        assert format_error_message(ValueError("bad"), include_type=False) == "bad"

    def test_empty_import_error_gets_friendly_text(self):
        assert format_error_message(ImportError()) == (
            "ImportError: The native binary could not be initialized by this interpreter."
        )

    def test_empty_module_not_found_is_more_specific(self):
        assert format_error_message(ModuleNotFoundError()) == "ModuleNotFoundError: The platform package is not installed."

    def test_unknown_empty_exception(self):
        assert format_error_message(RuntimeError()) == "RuntimeError: (no additional details)"

    def test_escape_markup(self):
        assert escape_markup("[bold]x[/bold]") == "\\[bold]x\\[/bold]"


class TestDisplayBindingError:
    def test_ignores_other_errors(self):
        console = _console()
        assert display_binding_error(console, ValueError("nope")) is False
        assert console.file.getvalue() == ""

    def test_unsupported_platform_panel(self):
        console = _console()
        error = UnsupportedPlatformError("Unsupported OS: sunos, architecture: sparc", os="sunos", arch="sparc")

        assert display_binding_error(console, error, platform="sunos-sparc") is True

        output = console.file.getvalue()
        assert "Unsupported Platform" in output
        assert "sunos-sparc" in output
        assert "No prebuilt binary exists for sunos/sparc" in output

    def test_local_load_panel_shows_cause(self):
        console = _console()
        cause = ImportError("invalid ELF header")
        error = LocalLoadError("Failed to load local binding", path=Path("/opt/sunny.so"), cause=cause)

        display_binding_error(console, error)

        output = console.file.getvalue()
        assert "Local Binary Failed To Load" in output
        assert "ImportError: invalid ELF header" in output
        assert "/opt/sunny.so" in output

    def test_package_load_tip(self):
        console = _console()
        error = PackageLoadError("Package 'sunny-linux-x64-musl' not installed.", package_name="sunny-linux-x64-musl")

        display_binding_error(console, error)

        assert "pip install sunny-linux-x64-musl" in console.file.getvalue()

    def test_not_found_panel(self):
        console = _console()

        display_binding_error(console, BindingNotFoundError("Failed to load native binding"))

        assert "Native Binding Not Found" in console.file.getvalue()
