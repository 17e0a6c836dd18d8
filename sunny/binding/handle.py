"""Loaded binding handle exposing the fixed operation set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import ModuleType
from typing import Any

from .matrix import CandidateSpec

# Public operations of the native module. Fixed in advance, never discovered.
EXPORTED_OPERATIONS = (
    "sum",
    "sub",
    "concat_str",
    "get_options",
    "async_fib",
    "call_threadsafe_function",
)


class LoadTier(str, Enum):
    """Where a binding was loaded from."""

    LOCAL = "local"
    PACKAGE = "package"


@dataclass(frozen=True)
class BindingHandle:
    """Successfully loaded native module.

    Operations are read straight off the module: ``handle.sum(1, 2)``.
    Anything outside EXPORTED_OPERATIONS is not part of the surface.
    """

    module: ModuleType
    candidate: CandidateSpec
    tier: LoadTier

    def __getattr__(self, name: str) -> Any:
        if name not in EXPORTED_OPERATIONS:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        try:
            return getattr(self.module, name)
        except AttributeError:
            raise AttributeError(
                f"Native binding '{self.candidate.suffix}' does not provide operation '{name}'"
            ) from None

    def operations(self) -> dict[str, Any]:
        """Operations the loaded module actually provides."""
        return {name: getattr(self.module, name) for name in EXPORTED_OPERATIONS if hasattr(self.module, name)}

    @property
    def origin(self) -> str:
        """Local file path or package name the binding came from."""
        if self.tier is LoadTier.LOCAL:
            return getattr(self.module, "__file__", None) or self.candidate.local_file_name
        return self.candidate.package_name

    def __repr__(self) -> str:
        return f"BindingHandle({self.candidate.suffix}, {self.tier.value})"
