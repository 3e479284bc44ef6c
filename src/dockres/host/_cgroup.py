# SPDX-License-Identifier: Apache-2.0
"""Cgroup v1/v2 file lookup and parsing for the current process."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from ..exceptions import MethodUnavailable
from ..settings import Settings

# Anything at or above 1 PiB is the kernel's "no limit" marker on v1
# (PAGE_COUNTER_MAX rounded to the page size).
UNLIMITED_THRESHOLD = 1024 ** 5


@dataclass(frozen=True)
class CgroupEntry:
    """One line of /proc/<pid>/cgroup: ``hierarchy-id:controllers:path``."""

    hierarchy_id: str
    controllers: Tuple[str, ...]
    path: str

    @property
    def is_unified(self) -> bool:
        return not self.controllers


def parse_membership(text: str) -> List[CgroupEntry]:
    """Parse a cgroup membership record into entries.

    Malformed lines (fewer than three fields) are skipped.
    """
    entries = []
    for line in text.splitlines():
        parts = line.split(":", 2)
        if len(parts) != 3:
            continue
        controllers = tuple(c for c in parts[1].split(",") if c)
        entries.append(CgroupEntry(parts[0], controllers, parts[2]))
    return entries


class CgroupReader:
    """Resolve and read cgroup files belonging to this process.

    Every failure raises :class:`MethodUnavailable` so callers can move
    on to the next detection method.
    """

    def __init__(self, settings: Settings):
        self._root = Path(settings.cgroup_root)
        self._membership = Path(settings.proc_cgroup)

    def _entries(self) -> List[CgroupEntry]:
        try:
            text = self._membership.read_text()
        except OSError as e:
            raise MethodUnavailable(f"cannot read {self._membership}: {e.strerror or e}") from e
        return parse_membership(text)

    def locate(self, filename: str, controller: Optional[str] = None) -> Path:
        """Return the absolute path of *filename* for this process.

        With *controller* ``None`` the unified (v2) entry is used and the
        file lives at ``<root>/<path>/<filename>``.  Otherwise the v1 entry
        listing *controller* is used, at ``<root>/<controller>/<path>/<filename>``.

        Raises:
            MethodUnavailable: No matching entry or the file does not exist.
        """
        entries = self._entries()
        if controller is None:
            match = next((e for e in entries if e.is_unified), None)
            if match is None:
                raise MethodUnavailable("unified cgroup entry not found")
            base = self._root
        else:
            match = next((e for e in entries if controller in e.controllers), None)
            if match is None:
                raise MethodUnavailable(f"controller {controller} not in {self._membership}")
            base = self._root / controller
        path = base / match.path.lstrip("/") / filename
        if not path.is_file():
            raise MethodUnavailable(f"{path} not found")
        return path

    def read(self, filename: str, controller: Optional[str] = None) -> str:
        path = self.locate(filename, controller)
        try:
            return path.read_text().strip()
        except OSError as e:
            raise MethodUnavailable(f"cannot read {path}: {e.strerror or e}") from e

    def read_int(self, filename: str, controller: Optional[str] = None) -> int:
        raw = self.read(filename, controller)
        try:
            return int(raw)
        except ValueError:
            raise MethodUnavailable(f"non-numeric value {raw!r} in {filename}") from None

    # -- CPU ---------------------------------------------------------------

    def v2_cpu_quota(self) -> Tuple[int, int]:
        """Return ``(quota, period)`` from the unified ``cpu.max``."""
        fields = self.read("cpu.max").split()
        if len(fields) < 2 or fields[0] == "max":
            raise MethodUnavailable("no v2 CPU quota set")
        try:
            return int(fields[0]), int(fields[1])
        except ValueError:
            raise MethodUnavailable(f"parse error in cpu.max: {' '.join(fields)!r}") from None

    def v1_cpu_quota(self) -> Tuple[int, int]:
        """Return ``(quota, period)`` from the v1 ``cpu`` controller."""
        quota = self.read_int("cpu.cfs_quota_us", "cpu")
        period = self.read_int("cpu.cfs_period_us", "cpu")
        return quota, period

    def v1_cpuset(self) -> str:
        return self.read("cpuset.cpus", "cpuset")

    # -- Memory ------------------------------------------------------------

    def v2_memory_limit(self) -> int:
        raw = self.read("memory.max")
        if raw == "max":
            raise MethodUnavailable("no v2 memory limit")
        try:
            return int(raw)
        except ValueError:
            raise MethodUnavailable(f"non-numeric value {raw!r} in memory.max") from None

    def v1_memory_limit(self) -> int:
        limit = self.read_int("memory.limit_in_bytes", "memory")
        if limit >= UNLIMITED_THRESHOLD:
            raise MethodUnavailable("no v1 memory limit")
        return limit
