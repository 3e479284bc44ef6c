# SPDX-License-Identifier: Apache-2.0
"""Numeric and string helpers shared by the probe and the scaler."""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal

GiB = 1024 ** 3

_MIB_PER_UNIT = {
    "m": 1,
    "g": 1024,
}

_SIZE_RE = re.compile(r"^\s*(\d+)\s*([mg])b?\s*$", re.IGNORECASE)

_CPU_QUANTUM = Decimal("0.01")


def count_cpuset(text: str) -> int:
    """Count the CPUs listed in a cpuset range string.

    The format is the kernel's compact list syntax: comma-separated
    entries, each a single CPU number or an inclusive ``start-end``
    range, e.g. ``'0-3,6,8-9'`` (7 CPUs).  Overlapping entries
    are counted once.

    Raises:
        ValueError: If the string is empty, an entry is not numeric, or
            a range ends before it starts.
    """
    text = text.strip()
    if not text:
        raise ValueError("empty cpuset")
    cpus = set()
    for segment in text.split(","):
        start_s, sep, end_s = segment.partition("-")
        try:
            start = int(start_s)
            end = int(end_s) if sep else start
        except ValueError:
            raise ValueError(f"invalid cpuset segment {segment!r}") from None
        if start < 0 or end < start:
            raise ValueError(f"invalid cpuset segment {segment!r}")
        cpus.update(range(start, end + 1))
    return len(cpus)


def round_cpu(value: float) -> float:
    """Round a CPU share to two decimals, halves away from zero."""
    return float(Decimal(repr(value)).quantize(_CPU_QUANTUM, rounding=ROUND_HALF_UP))


def bytes_to_gb(n: int) -> int:
    """Whole GiB needed to hold *n* bytes (rounds up)."""
    return -(-n // GiB)


def format_mem(mib: int) -> str:
    """Render MiB as a Compose memory string: ``'2g'`` or ``'1536m'``."""
    if mib % 1024 == 0:
        return f"{mib // 1024}g"
    return f"{mib}m"


def parse_memory_mib(s: str) -> int:
    """Parse a human-friendly memory size into MiB.

    Accepts ``'20g'``, ``'20gb'``, ``'512m'`` or ``'512mb'``; the suffix
    is required and case-insensitive.

    Raises:
        ValueError: If the string cannot be parsed.
    """
    m = _SIZE_RE.match(s)
    if m is None:
        raise ValueError(f"invalid memory size: {s!r} (use m/mb or g/gb)")
    return int(m.group(1)) * _MIB_PER_UNIT[m.group(2).lower()]
