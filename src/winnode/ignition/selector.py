# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/winnode/ignition/selector.py

from __future__ import annotations

from typing import Iterable

from winnode.errors import NotFoundError
from winnode.ignition.models import MachineConfig

# Identifies the rendered worker MachineConfig, the combination of all worker MachineConfigs.
RENDERED_WORKER_PREFIX = "rendered-worker-"


def get_latest_rendered_worker(machine_configs: Iterable[MachineConfig]) -> MachineConfig:
    """
    Return the most recently created rendered worker MachineConfig with a payload.

    Sorting is stable, so candidates sharing a timestamp keep their input order.
    """
    newest_first = sorted(machine_configs, key=lambda mc: mc.creation_timestamp, reverse=True)
    for mc in newest_first:
        if not mc.name.startswith(RENDERED_WORKER_PREFIX):
            continue
        if not mc.raw:
            continue
        return mc
    raise NotFoundError("rendered worker MachineConfig not found")
