# SPDX-License-Identifier: Apache-2.0
"""Host resource detection for containers."""

from .detector import ResourceDetector, logical_cpu_count, probe
from .info import SystemInfo
from .platform import OSType, detect_os

__all__ = [
    "ResourceDetector",
    "SystemInfo",
    "OSType",
    "detect_os",
    "logical_cpu_count",
    "probe",
]
