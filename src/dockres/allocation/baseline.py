# SPDX-License-Identifier: Apache-2.0
"""Per-service resource records and the reference allocation table."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Union

from ..units import format_mem


@dataclass(frozen=True)
class CPUMem:
    """CPU share and memory for either limits or reservations."""

    cpu: float
    memory_mib: int


@dataclass(frozen=True)
class Resource:
    """Limits and reservations for one service."""

    limits: CPUMem
    reservations: CPUMem

    def to_dict(self) -> Dict[str, Dict[str, Union[float, int]]]:
        return {
            "limits": {"cpu": self.limits.cpu, "memory_mib": self.limits.memory_mib},
            "reservations": {
                "cpu": self.reservations.cpu,
                "memory_mib": self.reservations.memory_mib,
            },
        }

    def to_compose(self) -> Dict[str, Dict[str, str]]:
        """Render as a Compose ``deploy.resources`` block."""
        return {
            "limits": {
                "cpus": f"{self.limits.cpu:g}",
                "memory": format_mem(self.limits.memory_mib),
            },
            "reservations": {
                "cpus": f"{self.reservations.cpu:g}",
                "memory": format_mem(self.reservations.memory_mib),
            },
        }


def _resource(cpu: float, mib: int, reserved_cpu: float, reserved_mib: int) -> Resource:
    return Resource(CPUMem(cpu, mib), CPUMem(reserved_cpu, reserved_mib))


def make_baseline(table: Mapping[str, Resource]) -> Mapping[str, Resource]:
    """Freeze *table* into a read-only mapping."""
    return MappingProxyType(dict(table))


# Relative weight of each service in the Alfresco Compose stack at a
# reference capacity of 10.5 CPUs / 11 GiB.
BASELINE: Mapping[str, Resource] = make_baseline({
    "database": _resource(1, 1024, 0.5, 512),
    "activemq": _resource(1, 1024, 0.5, 512),
    "transform-core-aio": _resource(2, 2048, 1, 1024),
    "alfresco": _resource(2, 3072, 1, 2048),
    "solr6": _resource(2, 1536, 1, 768),
    "share": _resource(1, 1024, 0.5, 512),
    "content-app": _resource(0.5, 512, 0.25, 256),
    "control-center": _resource(0.5, 512, 0.25, 256),
    "proxy": _resource(0.5, 512, 0.25, 256),
})
