"""Process-wide binding slot.

Resolution runs once per process. The first caller resolves under a lock;
the handle, or the terminal error, is kept for every later caller. There
is no re-resolution.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from types import TracebackType

from ..settings import SettingsManager
from .handle import BindingHandle
from .resolvers import NativeBindingResolver

logger = logging.getLogger(__name__)


class BindingSlot:
    """Single-assignment slot holding the resolved binding or its failure."""

    def __init__(self, factory: Callable[[], BindingHandle]):
        self._factory = factory
        self._lock = threading.Lock()
        self._resolved = False
        self._handle: BindingHandle | None = None
        self._error: Exception | None = None
        self._traceback: TracebackType | None = None

    @property
    def resolved(self) -> bool:
        return self._resolved

    def get(self) -> BindingHandle:
        """Return the binding, resolving it on first use.

        Raises:
            Exception: The cached resolution failure, on every call
        """
        if not self._resolved:
            with self._lock:
                if not self._resolved:
                    try:
                        self._handle = self._factory()
                    except Exception as e:
                        logger.debug(f"[binding:slot] resolution failed: {e}")
                        self._error = e
                        self._traceback = e.__traceback__
                    self._resolved = True

        if self._error is not None:
            # Reset to the resolution traceback so repeated raises don't stack frames
            raise self._error.with_traceback(self._traceback)
        assert self._handle is not None
        return self._handle


def _resolve_from_settings() -> BindingHandle:
    settings = SettingsManager().load()
    resolver = NativeBindingResolver(
        binding_dir=settings.binding.directory,
        product=settings.binding.product,
    )
    return resolver.resolve()


# Singleton instance
_slot = BindingSlot(_resolve_from_settings)


def get_binding() -> BindingHandle:
    """Get the process-wide native binding.

    Raises:
        BindingError: Resolution failed (same error on every call)
    """
    return _slot.get()
