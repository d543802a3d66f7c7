# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/winnode/payload/paths.py
"""
Layout of the payload directory the Windows node binaries are delivered from.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

# directory in the operator image where all the binaries live
PAYLOAD_DIR = Path("/payload")

WICD_NAME = "windows-instance-config-daemon.exe"
KUBE_NODE_DIR = "kube-node"
KUBELET_NAME = "kubelet.exe"
KUBE_PROXY_NAME = "kube-proxy.exe"
KUBE_LOG_RUNNER_NAME = "kube-log-runner.exe"
CONTAINERD_DIR = "containerd"
CONTAINERD_NAME = "containerd.exe"
HCSSHIM_NAME = "containerd-shim-runhcs-v1.exe"
CONTAINERD_CONF_NAME = "containerd_conf.toml"
POWERSHELL_DIR = "powershell"
GCP_GET_HOSTNAME_SCRIPT_NAME = "gcp-get-hostname.ps1"
WIN_DEFENDER_EXCLUSION_SCRIPT_NAME = "windows-defender-exclusion.ps1"
HNS_PS_MODULE_NAME = "hns.psm1"
CNI_DIR = "cni"
HOST_LOCAL_CNI_PLUGIN_NAME = "host-local.exe"
WIN_BRIDGE_CNI_PLUGIN_NAME = "win-bridge.exe"
WIN_OVERLAY_CNI_PLUGIN_NAME = "win-overlay.exe"
GENERATED_DIR = "generated"
NETWORK_CONF_SCRIPT_NAME = "network-conf.ps1"
HYBRID_OVERLAY_NAME = "hybrid-overlay-node.exe"
CSI_PROXY_DIR = "csi-proxy"
CSI_PROXY_NAME = "csi-proxy.exe"
WINDOWS_EXPORTER_DIR = "windows-exporter"
WINDOWS_EXPORTER_NAME = "windows_exporter.exe"
TLS_CONF_NAME = "windows-exporter-webconfig.yaml"
ECR_CREDENTIAL_PROVIDER_NAME = "ecr-credential-provider.exe"
AZURE_CLOUD_NODE_MANAGER_NAME = "azure-cloud-node-manager.exe"

WICD_PATH = PAYLOAD_DIR / WICD_NAME
KUBELET_PATH = PAYLOAD_DIR / KUBE_NODE_DIR / KUBELET_NAME
KUBE_PROXY_PATH = PAYLOAD_DIR / KUBE_NODE_DIR / KUBE_PROXY_NAME
KUBE_LOG_RUNNER_PATH = PAYLOAD_DIR / KUBE_NODE_DIR / KUBE_LOG_RUNNER_NAME
CONTAINERD_PATH = PAYLOAD_DIR / CONTAINERD_DIR / CONTAINERD_NAME
HCSSHIM_PATH = PAYLOAD_DIR / CONTAINERD_DIR / HCSSHIM_NAME
CONTAINERD_CONF_PATH = PAYLOAD_DIR / CONTAINERD_DIR / CONTAINERD_CONF_NAME
GCP_GET_HOSTNAME_SCRIPT_PATH = PAYLOAD_DIR / POWERSHELL_DIR / GCP_GET_HOSTNAME_SCRIPT_NAME
WIN_DEFENDER_EXCLUSION_SCRIPT_PATH = PAYLOAD_DIR / POWERSHELL_DIR / WIN_DEFENDER_EXCLUSION_SCRIPT_NAME
# PowerShell module with helpers for Windows HNS networks
HNS_PS_MODULE = PAYLOAD_DIR / POWERSHELL_DIR / HNS_PS_MODULE_NAME
HOST_LOCAL_CNI_PLUGIN = PAYLOAD_DIR / CNI_DIR / HOST_LOCAL_CNI_PLUGIN_NAME
WIN_BRIDGE_CNI_PLUGIN = PAYLOAD_DIR / CNI_DIR / WIN_BRIDGE_CNI_PLUGIN_NAME
WIN_OVERLAY_CNI_PLUGIN = PAYLOAD_DIR / CNI_DIR / WIN_OVERLAY_CNI_PLUGIN_NAME
NETWORK_CONF_SCRIPT = PAYLOAD_DIR / GENERATED_DIR / NETWORK_CONF_SCRIPT_NAME
HYBRID_OVERLAY_PATH = PAYLOAD_DIR / HYBRID_OVERLAY_NAME
CSI_PROXY_PATH = PAYLOAD_DIR / CSI_PROXY_DIR / CSI_PROXY_NAME
WINDOWS_EXPORTER_PATH = PAYLOAD_DIR / WINDOWS_EXPORTER_DIR / WINDOWS_EXPORTER_NAME
TLS_CONF_PATH = PAYLOAD_DIR / WINDOWS_EXPORTER_DIR / TLS_CONF_NAME
ECR_CREDENTIAL_PROVIDER_PATH = PAYLOAD_DIR / ECR_CREDENTIAL_PROVIDER_NAME
AZURE_CLOUD_NODE_MANAGER_PATH = PAYLOAD_DIR / AZURE_CLOUD_NODE_MANAGER_NAME

# delivered artifacts, relative to the payload root
_PAYLOAD_FILES = (
    (WICD_NAME,),
    (KUBE_NODE_DIR, KUBELET_NAME),
    (KUBE_NODE_DIR, KUBE_PROXY_NAME),
    (KUBE_NODE_DIR, KUBE_LOG_RUNNER_NAME),
    (CONTAINERD_DIR, CONTAINERD_NAME),
    (CONTAINERD_DIR, HCSSHIM_NAME),
    (CONTAINERD_DIR, CONTAINERD_CONF_NAME),
    (POWERSHELL_DIR, GCP_GET_HOSTNAME_SCRIPT_NAME),
    (POWERSHELL_DIR, WIN_DEFENDER_EXCLUSION_SCRIPT_NAME),
    (POWERSHELL_DIR, HNS_PS_MODULE_NAME),
    (CNI_DIR, HOST_LOCAL_CNI_PLUGIN_NAME),
    (CNI_DIR, WIN_BRIDGE_CNI_PLUGIN_NAME),
    (CNI_DIR, WIN_OVERLAY_CNI_PLUGIN_NAME),
    (GENERATED_DIR, NETWORK_CONF_SCRIPT_NAME),
    (HYBRID_OVERLAY_NAME,),
    (CSI_PROXY_DIR, CSI_PROXY_NAME),
    (WINDOWS_EXPORTER_DIR, WINDOWS_EXPORTER_NAME),
    (WINDOWS_EXPORTER_DIR, TLS_CONF_NAME),
    (ECR_CREDENTIAL_PROVIDER_NAME,),
    (AZURE_CLOUD_NODE_MANAGER_NAME,),
)


def payload_files(payload_dir: Path = PAYLOAD_DIR) -> List[Path]:
    """All artifacts delivered from *payload_dir*, whether or not they exist."""
    return [payload_dir.joinpath(*parts) for parts in _PAYLOAD_FILES]
