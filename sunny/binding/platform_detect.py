"""Platform detection for native binding selection.

Normalizes the interpreter's view of the host (sys.platform, platform.machine())
into the identifiers used by binary names: os in {linux, darwin, win32,
freebsd, android, ...} and arch in {x64, ia32, arm64, arm, riscv64, s390x, ...}.
"""

from __future__ import annotations

import platform
import re
import struct
import sys
from collections.abc import Callable
from dataclasses import dataclass

from .libc import is_musl_libc
from .matrix import requires_libc

# platform.machine() spellings -> binding arch
_MACHINE_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "i386": "ia32",
    "i486": "ia32",
    "i586": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv6l": "arm",
    "armv7l": "arm",
    "armv8l": "arm",
    "arm": "arm",
    "riscv64": "riscv64",
    "s390x": "s390x",
}

# 64-bit arch -> arch of a 32-bit process on that machine
_NARROW_ARCH = {"x64": "ia32", "arm64": "arm"}


@dataclass(frozen=True)
class PlatformKey:
    """Identifies which native binary variant the process requires."""

    os: str
    arch: str
    libc: str | None = None  # musl, gnu (Linux libc-split arches only)

    @property
    def is_linux(self) -> bool:
        return self.os == "linux"

    @property
    def is_darwin(self) -> bool:
        return self.os == "darwin"

    @property
    def is_windows(self) -> bool:
        return self.os == "win32"

    def __str__(self) -> str:
        parts = [self.os, self.arch]
        if self.libc:
            parts.append(self.libc)
        return "-".join(parts)


def normalize_os(sys_platform: str, android: bool = False) -> str:
    """Map a sys.platform value to the binding os identifier.

    Examples:
        linux -> linux, freebsd14 -> freebsd, sunos5 -> sunos
    """
    if android or sys_platform == "android":
        return "android"
    if sys_platform.startswith("linux"):
        return "linux"
    if sys_platform in ("win32", "cygwin"):
        return "win32"
    return re.sub(r"\d+$", "", sys_platform)


def normalize_arch(machine: str, pointer_bits: int = 64) -> str:
    """Map a platform.machine() value to the binding arch identifier.

    A 32-bit interpreter on a 64-bit machine gets the 32-bit arch since the
    binary has to match the process, not the kernel.
    """
    arch = _MACHINE_ALIASES.get(machine.lower(), machine.lower())
    if pointer_bits == 32:
        arch = _NARROW_ARCH.get(arch, arch)
    return arch


def _is_android() -> bool:
    return hasattr(sys, "getandroidapilevel")


def detect_platform(is_musl: Callable[[], bool] = is_musl_libc) -> PlatformKey:
    """Classify the current process.

    The libc classifier runs only for Linux arches whose binaries are split
    by libc.
    """
    os_name = normalize_os(sys.platform, android=_is_android())
    arch = normalize_arch(platform.machine(), pointer_bits=struct.calcsize("P") * 8)

    libc = None
    if os_name == "linux" and requires_libc(os_name, arch):
        libc = "musl" if is_musl() else "gnu"

    return PlatformKey(os=os_name, arch=arch, libc=libc)
