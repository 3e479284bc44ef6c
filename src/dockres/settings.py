# SPDX-License-Identifier: Apache-2.0
"""
Probe configuration.

Filesystem locations and external binaries used by the resource probe.
Every field can be overridden with a ``DOCKRES_``-prefixed environment
variable, e.g. ``DOCKRES_CGROUP_ROOT=/host/sys/fs/cgroup`` when the probe
runs with the host's cgroup tree mounted elsewhere.

USAGE:
    from dockres.settings import get_settings

    settings = get_settings()
    print(settings.cgroup_root)
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Locations and commands consulted while probing."""

    model_config = SettingsConfigDict(env_prefix="DOCKRES_", frozen=True)

    cgroup_root: Path = Field(
        default=Path("/sys/fs/cgroup"),
        description="Mount root of the cgroup hierarchy",
    )
    proc_cgroup: Path = Field(
        default=Path("/proc/self/cgroup"),
        description="Cgroup membership record of the current process",
    )
    proc_meminfo: Path = Field(
        default=Path("/proc/meminfo"),
        description="Kernel memory summary, last resort on Linux",
    )
    docker_bin: str = Field(
        default="docker",
        description="Container runtime CLI queried on macOS/Windows",
    )
    sysctl_bin: str = Field(
        default="sysctl",
        description="Host memory query on macOS",
    )
    command_timeout: Optional[float] = Field(
        default=None,
        description="Seconds before an external command is abandoned (None = wait)",
    )

    @field_validator("command_timeout")
    @classmethod
    def validate_command_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError("command_timeout must be positive")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings, read from the environment once."""
    return Settings()
