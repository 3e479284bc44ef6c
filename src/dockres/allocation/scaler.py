# SPDX-License-Identifier: Apache-2.0
"""Proportional rescaling of the baseline table to host capacity."""

from __future__ import annotations

import logging
import math
from typing import Dict, Mapping

from ..exceptions import AllocationError
from ..units import round_cpu
from .baseline import BASELINE, CPUMem, Resource

logger = logging.getLogger(__name__)


def _scale_pair(pair: CPUMem, cpu_factor: float, mem_factor: float) -> CPUMem:
    # Memory truncates so the total never exceeds what the host has.
    return CPUMem(
        cpu=round_cpu(pair.cpu * cpu_factor),
        memory_mib=int(pair.memory_mib * mem_factor),
    )


def scale(
    target_memory_mib: int,
    target_cpu: float,
    baseline: Mapping[str, Resource] = BASELINE,
) -> Dict[str, Resource]:
    """Scale every service in *baseline* so the limit totals match the targets.

    Each limit and reservation is multiplied by ``target / baseline total``
    for its dimension.  CPU values are rounded to two decimals; memory is
    truncated to whole MiB, so summed memory limits may fall short of
    *target_memory_mib* by up to ``len(baseline) - 1`` MiB but never exceed it.

    Args:
        target_memory_mib: Memory available to all services, in MiB.
        target_cpu: CPUs available to all services.
        baseline: Reference allocation; only its services are produced.

    Returns:
        New mapping of service name to scaled Resource.

    Raises:
        AllocationError: A target is negative or not finite, or a baseline total is zero.
    """
    if not (math.isfinite(target_memory_mib) and math.isfinite(target_cpu)):
        raise AllocationError(
            f"non-finite target: memory={target_memory_mib} MiB, cpu={target_cpu}"
        )
    if target_memory_mib < 0 or target_cpu < 0:
        raise AllocationError(
            f"negative target: memory={target_memory_mib} MiB, cpu={target_cpu}"
        )

    mem_total = sum(r.limits.memory_mib for r in baseline.values())
    cpu_total = sum(r.limits.cpu for r in baseline.values())
    if mem_total <= 0 or cpu_total <= 0:
        raise AllocationError(
            f"baseline totals must be positive (memory={mem_total} MiB, cpu={cpu_total})"
        )

    mem_factor = target_memory_mib / mem_total
    cpu_factor = target_cpu / cpu_total
    logger.debug(
        "scaling %d services: memory x%.4f, cpu x%.4f",
        len(baseline), mem_factor, cpu_factor,
    )

    return {
        name: Resource(
            limits=_scale_pair(r.limits, cpu_factor, mem_factor),
            reservations=_scale_pair(r.reservations, cpu_factor, mem_factor),
        )
        for name, r in baseline.items()
    }
