"""Static support matrix: platform -> ordered binary candidates.

Each entry maps (os, arch) to a platform suffix, or to a {libc: suffix}
dict when the arch ships separate musl and glibc builds. Candidate names
are derived from the suffix:

    local file:  <product>.<suffix>.<ext>   e.g. sunny.linux-x64-gnu.so
    package:     <product>-<suffix>         e.g. sunny-linux-x64-gnu
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import UnsupportedPlatformError

if TYPE_CHECKING:
    from .platform_detect import PlatformKey

DEFAULT_PRODUCT = "sunny"

SUPPORT_MATRIX: dict[str, dict[str, str | dict[str, str]]] = {
    "android": {
        "arm64": "android-arm64",
        "arm": "android-arm-eabi",
    },
    "win32": {
        "x64": "win32-x64-msvc",
        "ia32": "win32-ia32-msvc",
        "arm64": "win32-arm64-msvc",
    },
    "darwin": {
        "x64": "darwin-x64",
        "arm64": "darwin-arm64",
    },
    "freebsd": {
        "x64": "freebsd-x64",
    },
    "linux": {
        "x64": {"gnu": "linux-x64-gnu", "musl": "linux-x64-musl"},
        "arm64": {"gnu": "linux-arm64-gnu", "musl": "linux-arm64-musl"},
        "arm": {"gnu": "linux-arm-gnueabihf", "musl": "linux-arm-musleabihf"},
        "riscv64": {"gnu": "linux-riscv64-gnu", "musl": "linux-riscv64-musl"},
        "s390x": "linux-s390x-gnu",
    },
}

# Tried before the per-arch entry, whatever the arch; a failure here falls through to it
UNIVERSAL_SUFFIXES: dict[str, str] = {
    "darwin": "darwin-universal",
}

OS_LABELS = {
    "android": "Android",
    "win32": "Windows",
    "darwin": "macOS",
    "freebsd": "FreeBSD",
    "linux": "Linux",
}


@dataclass(frozen=True)
class CandidateSpec:
    """One entry in the fallback chain: a local file and its package."""

    suffix: str
    local_file_name: str
    package_name: str

    @property
    def import_name(self) -> str:
        """Python import name of the platform package."""
        return self.package_name.replace("-", "_")

    @classmethod
    def for_suffix(cls, suffix: str, os: str, product: str = DEFAULT_PRODUCT) -> CandidateSpec:
        ext = "pyd" if os == "win32" else "so"
        return cls(
            suffix=suffix,
            local_file_name=f"{product}.{suffix}.{ext}",
            package_name=f"{product}-{suffix}",
        )


def _lookup(os: str, arch: str) -> str | dict[str, str]:
    """Find the matrix entry for os/arch or raise UnsupportedPlatformError."""
    arches = SUPPORT_MATRIX.get(os)
    if arches is None:
        raise UnsupportedPlatformError(f"Unsupported OS: {os}, architecture: {arch}", os=os, arch=arch)

    entry = arches.get(arch)
    if entry is None:
        label = OS_LABELS.get(os, os)
        raise UnsupportedPlatformError(f"Unsupported architecture on {label} ({os}): {arch}", os=os, arch=arch)
    return entry


def requires_libc(os: str, arch: str) -> bool:
    """True if os/arch ships separate musl and glibc binaries."""
    arches = SUPPORT_MATRIX.get(os, {})
    return isinstance(arches.get(arch), dict)


def iter_candidates(key: PlatformKey, product: str = DEFAULT_PRODUCT) -> Iterator[CandidateSpec]:
    """Yield the platform's candidates in the order they are tried.

    The OS is checked before anything is yielded. A universal candidate
    does not depend on the arch, so it is yielded before the per-arch
    lookup runs; an unsupported arch raises only once the caller asks
    for the next candidate.

    Raises:
        UnsupportedPlatformError: os or arch not in the matrix
        ValueError: libc-split entry looked up without a libc
    """
    if key.os not in SUPPORT_MATRIX:
        _lookup(key.os, key.arch)

    if universal := UNIVERSAL_SUFFIXES.get(key.os):
        yield CandidateSpec.for_suffix(universal, key.os, product)

    entry = _lookup(key.os, key.arch)
    if isinstance(entry, dict):
        if key.libc is None:
            raise ValueError(f"Platform {key} requires a libc variant (one of: {', '.join(sorted(entry))})")
        suffix = entry.get(key.libc)
        if suffix is None:
            raise UnsupportedPlatformError(
                f"Unsupported libc on {OS_LABELS.get(key.os, key.os)} ({key.os}) {key.arch}: {key.libc}",
                os=key.os,
                arch=key.arch,
            )
    else:
        suffix = entry

    yield CandidateSpec.for_suffix(suffix, key.os, product)


def candidates_for(key: PlatformKey, product: str = DEFAULT_PRODUCT) -> list[CandidateSpec]:
    """Map a platform key to its full ordered candidate list.

    Pure lookup, no filesystem access. Raises for any unsupported os or
    arch, even where a universal candidate exists.

    Raises:
        UnsupportedPlatformError: os or arch not in the matrix
        ValueError: libc-split entry looked up without a libc
    """
    return list(iter_candidates(key, product))
