"""Binding source implementations.

Concrete load tiers for a candidate:
- LocalFileSource: compiled extension bundled next to the resolver
- PackageSource: platform-specific distribution package

Sources delegate the actual import to a BindingLoader so tests can count
and fake load attempts without real native binaries.
"""

from __future__ import annotations

import importlib
import importlib.machinery
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Protocol

from .errors import LocalLoadError
from .errors import PackageLoadError

logger = logging.getLogger(__name__)


class BindingLoader(Protocol):
    """Performs the dynamic load for each tier."""

    def load_file(self, path: Path, module_name: str) -> ModuleType | None: ...

    def load_package(self, import_name: str) -> ModuleType | None: ...


class ImportlibBindingLoader:
    """Load bindings through the interpreter's import machinery."""

    def load_file(self, path: Path, module_name: str) -> ModuleType:
        """Load a compiled extension from an explicit path.

        Args:
            path: Extension file (.so / .pyd)
            module_name: Import name; its last component selects the init symbol

        Raises:
            ImportError: File is not a loadable extension for this interpreter
        """
        loader = importlib.machinery.ExtensionFileLoader(module_name, str(path))
        spec = importlib.util.spec_from_file_location(module_name, path, loader=loader)
        if spec is None:
            raise ImportError(f"Cannot build import spec for {path}", name=module_name, path=str(path))

        module = importlib.util.module_from_spec(spec)
        loader.exec_module(module)
        sys.modules[module_name] = module
        return module

    def load_package(self, import_name: str) -> ModuleType:
        return importlib.import_module(import_name)

    def __repr__(self) -> str:
        return "ImportlibBindingLoader()"


class LocalFileSource:
    """Binary bundled alongside the resolver."""

    def __init__(self, path: str | Path, module_name: str):
        self.path = Path(path)
        self.module_name = module_name

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self, loader: BindingLoader) -> ModuleType | None:
        """Load the local binary.

        Raises:
            LocalLoadError: File exists but failed to initialize
        """
        logger.debug(f"[binding:load] local file {self.path}")
        try:
            return loader.load_file(self.path, self.module_name)
        except Exception as e:
            raise LocalLoadError(f"Failed to load local binding {self.path}: {e}", path=self.path, cause=e)

    def __repr__(self) -> str:
        return f"LocalFileSource({self.path})"


class PackageSource:
    """Installed platform-specific package."""

    def __init__(self, package_name: str, import_name: str | None = None):
        self.package_name = package_name
        self.import_name = import_name or package_name.replace("-", "_")

    def load(self, loader: BindingLoader) -> ModuleType | None:
        """Import the platform package.

        Raises:
            PackageLoadError: Package missing or failed to initialize
        """
        logger.debug(f"[binding:load] package {self.package_name} (import {self.import_name})")
        try:
            return loader.load_package(self.import_name)
        except ModuleNotFoundError as e:
            raise PackageLoadError(
                f"Package '{self.package_name}' not installed. Install with: pip install {self.package_name}",
                package_name=self.package_name,
                cause=e,
            )
        except Exception as e:
            raise PackageLoadError(
                f"Failed to load package '{self.package_name}': {e}",
                package_name=self.package_name,
                cause=e,
            )

    def __repr__(self) -> str:
        return f"PackageSource({self.package_name})"
