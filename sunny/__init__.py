"""sunny - precompiled native module with platform-aware loading.

The native operations are re-exported here and resolve the binding on
first access:

    import sunny
    sunny.sum(1, 2)
"""

from .binding import EXPORTED_OPERATIONS
from .binding import get_binding


def __getattr__(name: str):
    if name in EXPORTED_OPERATIONS:
        return getattr(get_binding(), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(EXPORTED_OPERATIONS))


__all__ = ["get_binding", *EXPORTED_OPERATIONS]
