# SPDX-License-Identifier: Apache-2.0
"""Detect the CPU and memory a container can use on this host.

On Linux the real cgroup limits of the current process are read (v2
unified hierarchy first, then v1 controllers), falling back to what the
kernel reports for the whole machine.  On macOS and Windows containers
run inside Docker Desktop's VM, so its configured limits are queried
through ``docker info``.

Each source is an independent method; a chain tries them in priority
order and the first one that produces a value wins.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from ..exceptions import (
    DegradedProbeError,
    MethodUnavailable,
    ProbeError,
    ProbeExhaustedError,
    SystemInfoError,
    UnsupportedPlatformError,
    join_errors,
)
from ..settings import Settings, get_settings
from ..units import count_cpuset
from . import _commands
from ._cgroup import CgroupReader
from .info import SystemInfo
from .platform import OSType, detect_os

logger = logging.getLogger(__name__)

Method = Tuple[str, Callable[[], int]]


def logical_cpu_count() -> int:
    """Logical CPUs this process may run on (affinity-aware on Linux)."""
    try:
        return len(os.sched_getaffinity(0))
    except (AttributeError, OSError):
        return os.cpu_count() or 0


def read_meminfo_total(path: Path) -> int:
    """Return ``MemTotal`` from a /proc/meminfo-style file, in bytes.

    Raises:
        MethodUnavailable: File unreadable, field missing or malformed.
    """
    try:
        with open(path) as f:
            for line in f:
                if line.startswith("MemTotal:"):
                    fields = line.split()
                    try:
                        return int(fields[1]) * 1024
                    except (IndexError, ValueError):
                        raise MethodUnavailable(f"malformed MemTotal line {line.strip()!r}") from None
    except OSError as e:
        raise MethodUnavailable(f"cannot read {path}: {e.strerror or e}") from e
    raise MethodUnavailable(f"MemTotal not found in {path}")


def _quota_to_cpus(quota: int, period: int) -> int:
    if quota <= 0 or period <= 0:
        raise MethodUnavailable(f"no CPU quota set (quota={quota}, period={period})")
    return quota // period


def _positive(value: int, what: str) -> int:
    if value <= 0:
        raise MethodUnavailable(f"non-positive {what}: {value}")
    return value


def _first_available(what: str, methods: Sequence[Method]) -> int:
    """Return the value of the first method in *methods* that succeeds.

    Raises:
        ProbeExhaustedError: Every method raised MethodUnavailable.
    """
    failures: List[str] = []
    for label, method in methods:
        try:
            value = method()
        except MethodUnavailable as e:
            logger.debug("%s: %s unavailable: %s", what, label, e)
            failures.append(f"{label}: {e}")
            continue
        logger.debug("%s: %s -> %d", what, label, value)
        return value
    raise ProbeExhaustedError(f"{what} detection failed", failures)


class ResourceDetector:
    """Detect container CPU and memory limits for the current host.

    Args:
        settings: Filesystem locations and binaries to use.  Defaults to
            :func:`get_settings`.
        os_type: Platform to probe as.  Defaults to the running OS.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        os_type: Optional[OSType] = None,
    ):
        self._settings = settings if settings is not None else get_settings()
        self._os = os_type if os_type is not None else detect_os()
        self._cgroup = CgroupReader(self._settings)

    @property
    def os_type(self) -> OSType:
        return self._os

    # -- method chains -----------------------------------------------------

    def _logical_cpus(self) -> int:
        return _positive(logical_cpu_count(), "logical CPU count")

    def _cgroup_cpuset(self) -> int:
        cpuset = self._cgroup.v1_cpuset()
        try:
            return count_cpuset(cpuset)
        except ValueError as e:
            raise MethodUnavailable(str(e)) from None

    def _docker_cpus(self) -> int:
        return _positive(_commands.docker_cpu_count(self._settings), "docker NCPU")

    def _docker_memory(self) -> int:
        return _positive(_commands.docker_mem_total(self._settings), "docker MemTotal")

    def _sysctl_memory(self) -> int:
        return _positive(_commands.sysctl_mem_total(self._settings), "hw.memsize")

    def _linux_cpu_methods(self) -> List[Method]:
        cg = self._cgroup
        return [
            ("cgroup v2 cpu.max", lambda: _quota_to_cpus(*cg.v2_cpu_quota())),
            ("cgroup v1 cfs quota", lambda: _quota_to_cpus(*cg.v1_cpu_quota())),
            ("cgroup v1 cpuset", self._cgroup_cpuset),
            ("logical CPUs", self._logical_cpus),
        ]

    def _linux_memory_methods(self) -> List[Method]:
        cg = self._cgroup
        return [
            ("cgroup v2 memory.max", lambda: _positive(cg.v2_memory_limit(), "memory.max")),
            ("cgroup v1 memory limit", lambda: _positive(cg.v1_memory_limit(), "memory.limit_in_bytes")),
            ("/proc/meminfo", lambda: read_meminfo_total(self._settings.proc_meminfo)),
        ]

    # -- public API --------------------------------------------------------

    def get_cpu_count(self) -> int:
        """Number of CPUs available to containers.

        Raises:
            DegradedProbeError: Docker Desktop could not be queried; the
                host's logical CPU count is carried in ``.value``.
            ProbeExhaustedError: No method produced a value.
        """
        if self._os == OSType.LINUX:
            return _first_available("CPU", self._linux_cpu_methods())

        if self._os in (OSType.MAC, OSType.WINDOWS):
            try:
                return _first_available("CPU", [("docker info", self._docker_cpus)])
            except ProbeExhaustedError as e:
                raise DegradedProbeError(
                    f"docker info unavailable, falling back to host CPUs ({e})",
                    logical_cpu_count(),
                ) from e

        return _first_available("CPU", [("logical CPUs", self._logical_cpus)])

    def get_ram_bytes(self) -> int:
        """Memory limit for containers, in bytes.

        Raises:
            ProbeExhaustedError: No method produced a value.
            UnsupportedPlatformError: No method exists for this platform.
        """
        if self._os == OSType.LINUX:
            return _first_available("memory", self._linux_memory_methods())
        if self._os == OSType.MAC:
            return _first_available("memory", [
                ("docker info", self._docker_memory),
                ("sysctl hw.memsize", self._sysctl_memory),
            ])
        if self._os == OSType.WINDOWS:
            return _first_available("memory", [("docker info", self._docker_memory)])
        raise UnsupportedPlatformError(f"memory detection unsupported on {self._os.value}")

    def get_system_info(self) -> Tuple[SystemInfo, Optional[SystemInfoError]]:
        """Probe CPU and memory.

        Never raises.  Fields that could not be determined are ``0`` and
        every failure is collected into the returned error.
        """
        errors: List[ProbeError] = []

        cpu_count = 0
        try:
            cpu_count = self.get_cpu_count()
        except DegradedProbeError as e:
            cpu_count = e.value
            errors.append(e)
        except ProbeError as e:
            errors.append(e)

        ram_bytes = 0
        try:
            ram_bytes = self.get_ram_bytes()
        except ProbeError as e:
            errors.append(e)

        info = SystemInfo(cpu_count=cpu_count, ram_bytes=ram_bytes)
        error = join_errors(errors)
        if error is not None:
            logger.warning("resource probe incomplete: %s", error)
        return info, error


def probe(
    settings: Optional[Settings] = None,
    *,
    os_type: Optional[OSType] = None,
) -> Tuple[SystemInfo, Optional[SystemInfoError]]:
    """Detect what this host can give a container.

    Shorthand for ``ResourceDetector(settings, os_type=os_type).get_system_info()``.
    """
    return ResourceDetector(settings, os_type=os_type).get_system_info()
