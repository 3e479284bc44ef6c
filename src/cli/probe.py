# SPDX-License-Identifier: Apache-2.0
"""Implementation of 'dockres probe' command."""

from dockres import probe

from . import _print_result, _print_warning


def cmd_probe(args) -> int:
    info, err = probe()
    if err is not None:
        _print_warning(str(err), args)
    _print_result({"command": "probe", **info.to_dict()}, args)
    return 0
