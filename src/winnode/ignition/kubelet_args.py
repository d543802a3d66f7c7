# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/winnode/ignition/kubelet_args.py

from __future__ import annotations

from enum import Enum
from typing import AbstractSet, Dict

from winnode.errors import MissingFieldError

EXEC_START = "ExecStart="
# ExecStart ends at the first empty line of the unit file
EXEC_END = "\n\n"
CONTINUATION = "\\\n"


class KubeletOption(str, Enum):
    """kubelet CLI options a Windows node takes over from the Linux unit."""

    CLOUD_PROVIDER = "cloud-provider"
    CLOUD_CONFIG = "cloud-config"


WINDOWS_KUBELET_OPTIONS: frozenset[str] = frozenset(o.value for o in KubeletOption)


def parse_kubelet_args(
    unit_contents: str,
    allowed: AbstractSet[str] = WINDOWS_KUBELET_OPTIONS,
) -> Dict[str, str]:
    """
    Parse the ExecStart command of a systemd unit into ``{option: value}``.

    Only ``--key=value`` arguments whose key is in *allowed* are returned.
    Bare flags (``--windows-service``) are skipped. When an option repeats,
    the last occurrence wins.
    """
    exec_split = unit_contents.split(EXEC_START, 1)
    if len(exec_split) != 2:
        raise MissingFieldError("unit missing ExecStart")

    command = exec_split[1].split(EXEC_END, 1)[0]
    # first token is the binary
    arguments = command.split(CONTINUATION)[1:]

    args: Dict[str, str] = {}
    for arg in arguments:
        arg = arg.strip()
        if arg.startswith("--"):
            arg = arg[2:]
        key, sep, value = arg.partition("=")
        if not sep:
            continue
        if key in allowed:
            args[key] = value
    return args
