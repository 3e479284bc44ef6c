# SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for resource probing and allocation."""

from typing import Iterable, Optional, Sequence


class DockresError(Exception):
    """Base exception for all dockres errors."""

    pass


class ProbeError(DockresError):
    """Resource probing failed."""

    pass


class MethodUnavailable(ProbeError):
    """A single detection method could not produce a value.

    Raised for missing cgroup entries or files, unparsable contents,
    a missing binary or a failing command.  Only advances the fallback
    chain; never reported on its own.
    """

    pass


class ProbeExhaustedError(ProbeError):
    """Every method in a detection chain failed."""

    def __init__(self, what: str, failures: Sequence[str]):
        self.what = what
        self.failures = list(failures)
        super().__init__(f"{what}: " + "; ".join(self.failures))


class DegradedProbeError(ProbeError):
    """A fallback value was used because the preferred source failed."""

    def __init__(self, message: str, value: int):
        self.value = value
        super().__init__(message)


class UnsupportedPlatformError(ProbeError):
    """No detection method exists for this platform."""

    pass


class SystemInfoError(ProbeError):
    """Aggregate of every probe failure behind a SystemInfo."""

    def __init__(self, errors: Iterable[ProbeError]):
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))


class AllocationError(DockresError):
    """Allocation scaling precondition violated."""

    pass


def join_errors(errors: Sequence[ProbeError]) -> Optional[SystemInfoError]:
    """Wrap *errors* into a SystemInfoError, or None when empty."""
    return SystemInfoError(errors) if errors else None
