# SPDX-License-Identifier: Apache-2.0
"""Implementation of 'dockres scale' command."""

import json

from dockres import probe, scale
from dockres.units import format_mem, parse_memory_mib

from . import _print_error, _print_warning


def _resolve_totals(args):
    """Return ``(memory_mib, cpus)`` from flags, probing for what is missing.

    Returns None after printing an error when detected memory is below
    ``--min-ram``.
    """
    memory_mib = parse_memory_mib(args.memory) if args.memory is not None else None
    cpus = args.cpus

    if memory_mib is None or cpus is None:
        info, err = probe()
        if err is not None:
            _print_warning(str(err), args)
        if memory_mib is None:
            if info.ram_gb < args.min_ram:
                _print_error(
                    f"insufficient RAM: {info.ram_gb} GB detected, "
                    f"at least {args.min_ram} GB is recommended",
                    args,
                )
                return None
            memory_mib = info.ram_gb * 1024
        if cpus is None:
            cpus = float(info.cpu_count)

    return memory_mib, cpus


def cmd_scale(args) -> int:
    if args.cpus is not None and args.cpus < 0:
        _print_error("--cpus must not be negative", args)
        return 1

    totals = _resolve_totals(args)
    if totals is None:
        return 1
    memory_mib, cpus = totals

    plan = scale(memory_mib, cpus)

    if args.format == "json":
        print(json.dumps({
            "command": "scale",
            "memory_mib": memory_mib,
            "cpus": cpus,
            "services": {name: r.to_dict() for name, r in plan.items()},
        }))
    elif args.format == "compose":
        print(json.dumps({
            "services": {
                name: {"deploy": {"resources": r.to_compose()}}
                for name, r in plan.items()
            },
        }, indent=2))
    else:
        print(f"total: cpus={cpus:g} memory={format_mem(memory_mib)}")
        width = max(len(name) for name in plan)
        for name, r in plan.items():
            print(
                f"  {name:<{width}}  "
                f"limits cpus={r.limits.cpu:g} memory={format_mem(r.limits.memory_mib)}  "
                f"reservations cpus={r.reservations.cpu:g} "
                f"memory={format_mem(r.reservations.memory_mib)}"
            )
    return 0
