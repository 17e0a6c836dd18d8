"""C library classification for Linux hosts.

Decides whether the running process is linked against musl or a
glibc-compatible libc. Only used to pick between the two Linux binary
variants of an architecture.

Detection order:
1. Runtime report: glibc publishes its runtime version through confstr;
   a report without that field means musl.
2. ldd probe (report unavailable): locate ldd and look for "musl" in it.

If the probe itself fails the process is classified as musl. Picking the
narrower binary on an ambiguous host is the intended default, so a glibc
system without a discoverable ldd will be treated as musl.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Callable
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

GLIBC_VERSION_FIELD = "glibc_version_runtime"

RuntimeReport = Mapping[str, str]


def runtime_report() -> dict[str, str] | None:
    """Build the structured runtime report for this process.

    Returns:
        Dict with GLIBC_VERSION_FIELD when glibc reports a version,
        empty dict when it does not, None when the host cannot report at all
    """
    if not hasattr(os, "confstr"):
        return None

    report: dict[str, str] = {}
    try:
        # e.g. "glibc 2.35"
        value = os.confstr("CS_GNU_LIBC_VERSION")
    except (ValueError, OSError):
        value = None

    if value:
        report[GLIBC_VERSION_FIELD] = value.split()[-1]
    return report


def report_indicates_musl(report: RuntimeReport) -> bool:
    """musl does not populate a glibc version, so absence means musl."""
    return not report.get(GLIBC_VERSION_FIELD)


def ldd_indicates_musl() -> bool:
    """Probe the ldd utility for musl.

    Returns True when ldd mentions musl or when the probe fails.
    """
    try:
        result = subprocess.run(["which", "ldd"], capture_output=True, text=True, check=True)
        ldd_path = Path(result.stdout.strip())
        return "musl" in ldd_path.read_text(encoding="utf-8", errors="replace")
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug(f"[binding:libc] ldd probe failed, assuming musl: {e}")
        return True


class LibcClassifier:
    """Classify the process libc as musl or glibc-compatible."""

    def __init__(
        self,
        report_provider: Callable[[], RuntimeReport | None] = runtime_report,
        ldd_probe: Callable[[], bool] = ldd_indicates_musl,
    ):
        self._report_provider = report_provider
        self._ldd_probe = ldd_probe
        self._is_musl: bool | None = None

    def is_musl(self) -> bool:
        """Return True when the process uses musl. Computed once per instance."""
        if self._is_musl is None:
            self._is_musl = self._classify()
        return self._is_musl

    def _classify(self) -> bool:
        report = self._report_provider()
        if report is not None:
            musl = report_indicates_musl(report)
            logger.debug(f"[binding:libc] runtime report -> {'musl' if musl else 'gnu'}")
            return musl

        musl = self._ldd_probe()
        logger.debug(f"[binding:libc] ldd probe -> {'musl' if musl else 'gnu'}")
        return musl

    def __repr__(self) -> str:
        return f"LibcClassifier(is_musl={self._is_musl})"


_default_classifier = LibcClassifier()


def is_musl_libc() -> bool:
    """Classify the current process using the shared classifier."""
    return _default_classifier.is_musl()
