# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/winnode/config/models.py

from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field

from winnode.ignition.ignition import KUBELET_SYSTEMD_NAME
from winnode.payload.paths import HNS_PS_MODULE, NETWORK_CONF_SCRIPT, PAYLOAD_DIR


class NetworkConfig(BaseModel):
    """Inputs of the generated network configuration script."""
    service_cidr: Optional[str] = None               # cluster service network, e.g. 172.30.0.0/16
    hns_network: str = "OVNKubernetesHybridOverlayNetwork"
    hns_module_path: str = str(HNS_PS_MODULE)        # path as seen from the Windows node
    cni_config_path: str = "C:\\k\\cni\\config\\cni.conf"


class WinnodeConfig(BaseModel):
    payload_dir: Path = PAYLOAD_DIR
    network_conf_script: Path = NETWORK_CONF_SCRIPT
    kubelet_service: str = KUBELET_SYSTEMD_NAME
    kube_context: Optional[str] = None
    log_dir: Optional[Path] = None
    network: NetworkConfig = Field(default_factory=NetworkConfig)
