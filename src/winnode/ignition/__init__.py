# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

from winnode.ignition.ignition import (
    CLOUD_CONFIG_PATH,
    ECR_CREDENTIAL_PROVIDER_CONFIG_PATH,
    KUBELET_SYSTEMD_NAME,
    Ignition,
    find_kubelet_ca,
)
from winnode.ignition.kubelet_args import KubeletOption, WINDOWS_KUBELET_OPTIONS, parse_kubelet_args
from winnode.ignition.models import ControllerConfig, MachineConfig
from winnode.ignition.selector import RENDERED_WORKER_PREFIX, get_latest_rendered_worker

__all__ = [
    "CLOUD_CONFIG_PATH",
    "ECR_CREDENTIAL_PROVIDER_CONFIG_PATH",
    "KUBELET_SYSTEMD_NAME",
    "ControllerConfig",
    "Ignition",
    "KubeletOption",
    "MachineConfig",
    "RENDERED_WORKER_PREFIX",
    "WINDOWS_KUBELET_OPTIONS",
    "find_kubelet_ca",
    "get_latest_rendered_worker",
    "parse_kubelet_args",
]
