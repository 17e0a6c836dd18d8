"""Pytest configuration for sunny tests."""

import logging
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Allow running the suite from a checkout without installing the package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sunny.logging_setup import JsonlHandler  # noqa: E402


def make_binding(**overrides):
    """Stand-in for a loaded native module."""
    ops = {
        "sum": lambda a, b: a + b,
        "sub": lambda a, b: a - b,
        "concat_str": lambda a, b: f"{a}{b}",
        "get_options": lambda options: options,
        "async_fib": lambda n, use_cache=False: n,
        "call_threadsafe_function": lambda callback: callback(),
    }
    ops.update(overrides)
    return SimpleNamespace(**ops)


class SpyLoader:
    """BindingLoader that records every load attempt.

    files / packages map a file name or import name to either a module
    (returned) or an exception (raised). Anything unmapped is missing.
    """

    def __init__(self, files=None, packages=None):
        self.files = files or {}
        self.packages = packages or {}
        self.file_calls: list[Path] = []
        self.package_calls: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.file_calls) + len(self.package_calls)

    def load_file(self, path, module_name):
        self.file_calls.append(Path(path))
        return self._answer(self.files.get(Path(path).name), ImportError(f"no loader for {path}"))

    def load_package(self, import_name):
        self.package_calls.append(import_name)
        return self._answer(self.packages.get(import_name), ModuleNotFoundError(f"No module named '{import_name}'"))

    @staticmethod
    def _answer(entry, missing):
        if entry is None:
            raise missing
        if isinstance(entry, BaseException):
            raise entry
        return entry


@pytest.fixture
def binding_factory():
    return make_binding


@pytest.fixture
def spy_loader_cls():
    return SpyLoader


@pytest.fixture(autouse=True)
def _drop_jsonl_handlers():
    """Keep JSONL sinks and root level changes from leaking across tests."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    for handler in list(root.handlers):
        if isinstance(handler, JsonlHandler):
            root.removeHandler(handler)
            handler.close()
