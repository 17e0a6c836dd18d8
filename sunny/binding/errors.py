"""Binding resolution errors.

Every failure surfaced by the resolver derives from BindingError and carries:
- source: which stage produced it (ErrorSource)
- cause: the underlying exception, if any (also chained as __cause__)
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorSource(str, Enum):
    """Stage of resolution that produced an error."""

    UNSUPPORTED_PLATFORM = "unsupported_platform"
    LOCAL_LOAD_FAILED = "local_load_failed"
    PACKAGE_LOAD_FAILED = "package_load_failed"
    NOT_FOUND = "not_found"


class BindingError(Exception):
    """Base class for native binding resolution failures."""

    source: ErrorSource = ErrorSource.NOT_FOUND

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class UnsupportedPlatformError(BindingError):
    """Raised when the os/arch combination is not in the support matrix."""

    source = ErrorSource.UNSUPPORTED_PLATFORM

    def __init__(self, message: str, os: str, arch: str):
        super().__init__(message)
        self.os = os
        self.arch = arch


class BindingLoadError(BindingError):
    """Raised when a candidate binary was found but could not be loaded."""


class LocalLoadError(BindingLoadError):
    """A local binary exists next to the resolver but failed to initialize."""

    source = ErrorSource.LOCAL_LOAD_FAILED

    def __init__(self, message: str, path: Path, cause: BaseException | None = None):
        super().__init__(message, cause)
        self.path = path


class PackageLoadError(BindingLoadError):
    """The platform package is missing or failed to initialize."""

    source = ErrorSource.PACKAGE_LOAD_FAILED

    def __init__(self, message: str, package_name: str, cause: BaseException | None = None):
        super().__init__(message, cause)
        self.package_name = package_name


class BindingNotFoundError(BindingError):
    """No candidate produced a binding and no specific cause was recorded."""

    source = ErrorSource.NOT_FOUND
