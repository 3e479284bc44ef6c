# SPDX-License-Identifier: Apache-2.0
"""Probe result record."""

from dataclasses import dataclass
from typing import Dict

from ..units import bytes_to_gb


@dataclass(frozen=True)
class SystemInfo:
    """CPU and memory available to containers on this host.

    Fields that could not be determined are ``0``.
    """

    cpu_count: int = 0
    ram_bytes: int = 0

    @property
    def ram_gb(self) -> int:
        """Memory in whole GiB, rounded up."""
        return bytes_to_gb(self.ram_bytes)

    def to_dict(self) -> Dict[str, int]:
        return {
            "cpu_count": self.cpu_count,
            "ram_bytes": self.ram_bytes,
            "ram_gb": self.ram_gb,
        }
