# SPDX-License-Identifier: Apache-2.0
"""
dockres - Size a Docker Compose stack to the host it runs on.

Detects the CPU and memory that containers can actually use (cgroup
limits on Linux, Docker Desktop settings on macOS/Windows) and scales a
fixed per-service baseline so that limits add up to that capacity.

Layers are loaded lazily:

    from dockres import probe        # loads the probe layer
    from dockres import scale        # loads the allocation layer

Example:
    from dockres import probe, scale

    info, err = probe()
    if err is not None:
        print(f"warning: {err}")
    plan = scale(info.ram_gb * 1024, info.cpu_count)
"""

# Exceptions are lightweight and always available.
from .exceptions import (
    DockresError,
    ProbeError,
    MethodUnavailable,
    ProbeExhaustedError,
    DegradedProbeError,
    UnsupportedPlatformError,
    SystemInfoError,
    AllocationError,
)

__all__ = [
    # Probe
    "probe",
    "ResourceDetector",
    "SystemInfo",
    "OSType",
    # Allocation
    "scale",
    "BASELINE",
    "CPUMem",
    "Resource",
    # Settings
    "Settings",
    "get_settings",
    # Exceptions
    "DockresError",
    "ProbeError",
    "MethodUnavailable",
    "ProbeExhaustedError",
    "DegradedProbeError",
    "UnsupportedPlatformError",
    "SystemInfoError",
    "AllocationError",
]

__version__ = "0.1.0"

# Lazy imports: each layer loads only when first accessed.
_LAZY_IMPORTS = {
    # Probe layer
    "probe": ".host.detector",
    "ResourceDetector": ".host.detector",
    "SystemInfo": ".host.info",
    "OSType": ".host.platform",
    # Allocation layer
    "scale": ".allocation.scaler",
    "BASELINE": ".allocation.baseline",
    "CPUMem": ".allocation.baseline",
    "Resource": ".allocation.baseline",
    # Settings
    "Settings": ".settings",
    "get_settings": ".settings",
}


def __getattr__(name: str):
    if name in _LAZY_IMPORTS:
        import importlib
        module = importlib.import_module(_LAZY_IMPORTS[name], __name__)
        value = getattr(module, name)
        # Cache on the module so __getattr__ isn't called again.
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
