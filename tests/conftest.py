# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures: synthetic cgroup trees and /proc files under tmp_path."""

from pathlib import Path

import pytest

from dockres.settings import Settings


class FakeHost:
    """Builds a cgroup mount root, membership record and meminfo on disk."""

    def __init__(self, root: Path):
        self.cgroup_root = root / "sys" / "fs" / "cgroup"
        self.proc_cgroup = root / "proc" / "self" / "cgroup"
        self.proc_meminfo = root / "proc" / "meminfo"
        self.cgroup_root.mkdir(parents=True)
        self.proc_cgroup.parent.mkdir(parents=True)

    @property
    def settings(self) -> Settings:
        return Settings(
            cgroup_root=self.cgroup_root,
            proc_cgroup=self.proc_cgroup,
            proc_meminfo=self.proc_meminfo,
            docker_bin="docker",
            sysctl_bin="sysctl",
        )

    def membership(self, *lines: str) -> None:
        self.proc_cgroup.write_text("\n".join(lines) + "\n")

    def v2_file(self, name: str, content: str, path: str = "/") -> None:
        d = self.cgroup_root / path.lstrip("/")
        d.mkdir(parents=True, exist_ok=True)
        (d / name).write_text(content + "\n")

    def v1_file(self, controller: str, name: str, content: str, path: str = "/") -> None:
        d = self.cgroup_root / controller / path.lstrip("/")
        d.mkdir(parents=True, exist_ok=True)
        (d / name).write_text(content + "\n")

    def meminfo(self, total_kb: int) -> None:
        self.proc_meminfo.write_text(
            f"MemTotal:       {total_kb} kB\n"
            "MemFree:         1234567 kB\n"
            "MemAvailable:    2345678 kB\n"
        )


@pytest.fixture
def host(tmp_path):
    return FakeHost(tmp_path)
