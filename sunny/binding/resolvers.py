"""Native binding resolver.

Resolution order for the current platform (first success wins):
1. macOS only: universal binary candidate (tried even for an unsupported arch)
2. Per-platform candidate from the support matrix (unsupported arch raises here)

Each candidate is loaded through exactly one tier:
- Local file next to the resolver, if it exists (a failed load is final)
- Otherwise the platform distribution package
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

from .errors import BindingError
from .errors import BindingNotFoundError
from .handle import BindingHandle
from .handle import LoadTier
from .libc import is_musl_libc
from .matrix import DEFAULT_PRODUCT
from .matrix import CandidateSpec
from .matrix import candidates_for
from .matrix import iter_candidates
from .platform_detect import PlatformKey
from .platform_detect import detect_platform
from .sources import BindingLoader
from .sources import ImportlibBindingLoader
from .sources import LocalFileSource
from .sources import PackageSource

logger = logging.getLogger(__name__)

# Directory of the sunny package; local binaries ship here
DEFAULT_BINDING_DIR = Path(__file__).resolve().parent.parent
DEFAULT_MODULE_NAME = "sunny._sunny"


@dataclass(frozen=True)
class LoadAttemptResult:
    """Outcome of loading one candidate through one tier."""

    candidate: CandidateSpec
    tier: LoadTier
    module: ModuleType | None = None
    error: BindingError | None = None

    @property
    def succeeded(self) -> bool:
        return self.module is not None


class NativeBindingResolver:
    """Resolve the current platform to a loaded native binding."""

    def __init__(
        self,
        binding_dir: str | Path | None = None,
        product: str = DEFAULT_PRODUCT,
        module_name: str = DEFAULT_MODULE_NAME,
        loader: BindingLoader | None = None,
        platform_key: PlatformKey | None = None,
        is_musl: Callable[[], bool] = is_musl_libc,
    ):
        """Initialize resolver.

        Args:
            binding_dir: Directory searched for local binaries (default: package dir)
            product: Binary name prefix
            module_name: Import name given to a local extension
            loader: Performs the dynamic loads (default: importlib)
            platform_key: Platform to resolve for (default: detect current process)
            is_musl: libc classifier, consulted only while detecting Linux keys
        """
        self.binding_dir = Path(binding_dir) if binding_dir is not None else DEFAULT_BINDING_DIR
        self.product = product
        self.module_name = module_name
        self.loader = loader or ImportlibBindingLoader()
        self._platform_key = platform_key
        self._is_musl = is_musl

    @property
    def platform_key(self) -> PlatformKey:
        if self._platform_key is None:
            self._platform_key = detect_platform(is_musl=self._is_musl)
        return self._platform_key

    def candidates(self) -> list[CandidateSpec]:
        """Ordered candidates for the platform.

        Raises:
            UnsupportedPlatformError: Platform not in the support matrix
        """
        return candidates_for(self.platform_key, product=self.product)

    def iter_candidates(self) -> Iterator[CandidateSpec]:
        """Candidates in try order, checking the arch only after any universal one.

        Raises:
            UnsupportedPlatformError: Platform not in the support matrix
        """
        return iter_candidates(self.platform_key, product=self.product)

    def local_path(self, candidate: CandidateSpec) -> Path:
        return self.binding_dir / candidate.local_file_name

    def attempt(self, candidate: CandidateSpec) -> LoadAttemptResult:
        """Load one candidate: the local file if present, else its package."""
        local = LocalFileSource(self.local_path(candidate), self.module_name)
        if local.exists():
            tier = LoadTier.LOCAL
            source: LocalFileSource | PackageSource = local
        else:
            tier = LoadTier.PACKAGE
            source = PackageSource(candidate.package_name, candidate.import_name)

        try:
            module = source.load(self.loader)
        except BindingError as e:
            if tier is LoadTier.LOCAL:
                logger.warning(f"[binding:resolve] {candidate.suffix} local binary failed to load: {e.cause}")
            return LoadAttemptResult(candidate=candidate, tier=tier, error=e)

        return LoadAttemptResult(candidate=candidate, tier=tier, module=module)

    def resolve(self) -> BindingHandle:
        """Resolve and load the binding for this platform."""
        handle, _tier = self.resolve_with_tier()
        return handle

    def resolve_with_tier(self) -> tuple[BindingHandle, LoadTier]:
        """Resolve the binding and report which tier produced it.

        Raises:
            UnsupportedPlatformError: Platform not in the support matrix, raised
                after a failed universal attempt when only the arch is unsupported
            LocalLoadError / PackageLoadError: Last candidate failed to load
            BindingNotFoundError: No candidate loaded and no cause was recorded
        """
        logger.debug(f"[binding:resolve] resolving for {self.platform_key}")

        last: LoadAttemptResult | None = None
        for candidate in self.iter_candidates():
            result = self.attempt(candidate)
            if result.succeeded:
                assert result.module is not None
                logger.info(f"[binding:resolve] {candidate.suffix} loaded from {result.tier.value}")
                return (BindingHandle(module=result.module, candidate=candidate, tier=result.tier), result.tier)

            logger.debug(f"[binding:resolve] {candidate.suffix} via {result.tier.value} failed: {result.error}")
            last = result

        if last is not None and last.error is not None:
            raise last.error
        raise BindingNotFoundError(f"Failed to load native binding for {self.platform_key}")

    def __repr__(self) -> str:
        return f"NativeBindingResolver({self.binding_dir})"
