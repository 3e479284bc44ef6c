# SPDX-License-Identifier: Apache-2.0
"""External command queries: ``docker info`` and ``sysctl``."""

import logging
import shutil
import subprocess
from typing import List, Optional

from ..exceptions import MethodUnavailable
from ..settings import Settings

logger = logging.getLogger(__name__)


def _run_int(cmd: List[str], timeout: Optional[float]) -> int:
    """Run *cmd* and parse its trimmed stdout as an integer.

    Raises:
        MethodUnavailable: Binary missing, non-zero exit, timeout, or
            output that is not an integer.
    """
    if shutil.which(cmd[0]) is None:
        raise MethodUnavailable(f"{cmd[0]} not installed")
    logger.debug("running %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
        raise MethodUnavailable(f"{' '.join(cmd)} failed: {detail}") from e
    except subprocess.TimeoutExpired as e:
        raise MethodUnavailable(f"{' '.join(cmd)} timed out after {timeout}s") from e
    except OSError as e:
        raise MethodUnavailable(f"{' '.join(cmd)} failed: {e}") from e
    out = result.stdout.strip()
    try:
        return int(out)
    except ValueError:
        raise MethodUnavailable(f"unexpected output from {cmd[0]}: {out!r}") from None


def docker_info_int(settings: Settings, go_template: str) -> int:
    """Query a single integer field of ``docker info``, e.g. ``{{.NCPU}}``."""
    return _run_int(
        [settings.docker_bin, "info", "--format", go_template],
        settings.command_timeout,
    )


def docker_cpu_count(settings: Settings) -> int:
    return docker_info_int(settings, "{{.NCPU}}")


def docker_mem_total(settings: Settings) -> int:
    return docker_info_int(settings, "{{.MemTotal}}")


def sysctl_mem_total(settings: Settings) -> int:
    """Total physical memory of a macOS host in bytes."""
    return _run_int([settings.sysctl_bin, "-n", "hw.memsize"], settings.command_timeout)
