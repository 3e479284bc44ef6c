# SPDX-License-Identifier: Apache-2.0
"""Host operating system classification."""

import sys
from enum import Enum
from typing import Optional


class OSType(str, Enum):
    LINUX = "linux"
    MAC = "mac"
    WINDOWS = "windows"
    OTHER = "other"


def detect_os(platform: Optional[str] = None) -> OSType:
    """Classify *platform* (default ``sys.platform``) into an OSType."""
    platform = sys.platform if platform is None else platform
    if platform.startswith("linux"):
        return OSType.LINUX
    if platform == "darwin":
        return OSType.MAC
    if platform in ("win32", "cygwin"):
        return OSType.WINDOWS
    return OSType.OTHER
