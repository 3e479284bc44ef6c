# SPDX-License-Identifier: Apache-2.0
"""CLI for dockres: detect container resources and size the Compose stack."""

import argparse
import json
import logging
import sys


def _print_result(data: dict, args: argparse.Namespace) -> None:
    """Print result as JSON (if --json) or human-readable text."""
    if getattr(args, "json", False):
        print(json.dumps(data))
    else:
        for key, value in data.items():
            print(f"{key}: {value}")


def _print_error(message: str, args: argparse.Namespace) -> None:
    """Print error as JSON (if --json) or plain text to stderr."""
    if getattr(args, "json", False):
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)


def _print_warning(message: str, args: argparse.Namespace) -> None:
    """Print a non-fatal probe warning to stderr."""
    if getattr(args, "json", False):
        print(json.dumps({"warning": message}), file=sys.stderr)
    else:
        print(f"warning: {message}", file=sys.stderr)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dockres",
        description="Detect container resources and scale the Compose stack to fit.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every detection method tried",
    )
    sub = parser.add_subparsers(dest="command")

    # --- probe ---
    p_probe = sub.add_parser(
        "probe",
        help="Show CPUs and memory available to containers.",
    )
    p_probe.add_argument("--json", action="store_true", help="JSON output")

    # --- scale ---
    p_scale = sub.add_parser(
        "scale",
        help="Scale per-service limits and reservations to the host.",
        description=(
            "Scale the baseline service allocation so limits add up to the "
            "given (or detected) CPUs and memory."
        ),
    )
    p_scale.add_argument(
        "--memory",
        default=None,
        metavar="SIZE",
        help="Total memory for all services (e.g. 16g, 12288m). Detected if omitted.",
    )
    p_scale.add_argument(
        "--cpus",
        type=float,
        default=None,
        metavar="N",
        help="Total CPUs for all services. Detected if omitted.",
    )
    p_scale.add_argument(
        "--min-ram",
        type=int,
        default=8,
        metavar="GB",
        help="Refuse detected memory below this many GB (default: 8)",
    )
    p_scale.add_argument(
        "--format",
        choices=["text", "json", "compose"],
        default="text",
        help="Output format (default: text)",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    # Errors from 'scale --format json|compose' are reported as JSON too.
    if getattr(args, "format", None) in ("json", "compose"):
        args.json = True

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args.verbose)

    try:
        if args.command == "probe":
            from .probe import cmd_probe
            sys.exit(cmd_probe(args))
        elif args.command == "scale":
            from .scale import cmd_scale
            sys.exit(cmd_scale(args))
        else:
            parser.print_help()
            sys.exit(1)
    except KeyboardInterrupt:
        print(file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        _print_error(str(e), args)
        sys.exit(1)
