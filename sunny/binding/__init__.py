"""Native binding resolution.

Picks the precompiled binary for the running os/arch/libc, loads it from a
bundled file or from the platform package, and keeps the result for the
life of the process.
"""

from .errors import BindingError
from .errors import BindingLoadError
from .errors import BindingNotFoundError
from .errors import ErrorSource
from .errors import LocalLoadError
from .errors import PackageLoadError
from .errors import UnsupportedPlatformError
from .handle import EXPORTED_OPERATIONS
from .handle import BindingHandle
from .handle import LoadTier
from .libc import LibcClassifier
from .libc import is_musl_libc
from .matrix import CandidateSpec
from .matrix import candidates_for
from .matrix import iter_candidates
from .platform_detect import PlatformKey
from .platform_detect import detect_platform
from .registry import BindingSlot
from .registry import get_binding
from .resolvers import LoadAttemptResult
from .resolvers import NativeBindingResolver
from .sources import ImportlibBindingLoader

__all__ = [
    "BindingError",
    "BindingHandle",
    "BindingLoadError",
    "BindingNotFoundError",
    "BindingSlot",
    "CandidateSpec",
    "EXPORTED_OPERATIONS",
    "ErrorSource",
    "ImportlibBindingLoader",
    "LibcClassifier",
    "LoadAttemptResult",
    "LoadTier",
    "LocalLoadError",
    "NativeBindingResolver",
    "PackageLoadError",
    "PlatformKey",
    "UnsupportedPlatformError",
    "candidates_for",
    "iter_candidates",
    "detect_platform",
    "get_binding",
    "is_musl_libc",
]
