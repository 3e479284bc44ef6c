# SPDX-License-Identifier: Apache-2.0
"""Per-service resource allocation scaled to host capacity."""

from .baseline import BASELINE, CPUMem, Resource, make_baseline
from .scaler import scale

__all__ = ["BASELINE", "CPUMem", "Resource", "make_baseline", "scale"]
