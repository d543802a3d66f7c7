# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/winnode/payload/network_conf.py

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from jinja2 import TemplateError

from winnode.errors import PayloadIOError, ScriptGenerationError
from winnode.payload.paths import NETWORK_CONF_SCRIPT
from winnode.template_renderer import TemplateRenderer

log = logging.getLogger("winnode")

TEMPLATES_DIR = Path(__file__).parent / "templates"
NETWORK_CONF_TEMPLATE = "network-conf.ps1.j2"

# compiled once; every render produces a new string
_NETWORK_CONF_TEMPLATE = TemplateRenderer(TEMPLATES_DIR).load(NETWORK_CONF_TEMPLATE)

PLACEHOLDERS = ("service_network_cidr", "hns_network", "hns_module_path", "cni_config_path")
PLACEHOLDER_TOKENS = tuple("{{ %s }}" % name for name in PLACEHOLDERS)

# TODO: the script does both CNI configuration and HNS endpoint creation; split it
#       into two scripts that can be reconciled independently.


def generate_network_conf_script(
    service_network_cidr: str,
    hns_network: str,
    hns_module_path: str,
    cni_config_path: str,
) -> str:
    """
    Render the PowerShell script that reconciles the CNI config, the VIP HNS
    endpoint and the kube-proxy config on a Windows node.

    Values are substituted in a single pass and are never re-expanded.
    """
    context = {
        "service_network_cidr": service_network_cidr,
        "hns_network": hns_network,
        "hns_module_path": hns_module_path,
        "cni_config_path": cni_config_path,
    }
    try:
        script = _NETWORK_CONF_TEMPLATE.render(**context)
    except TemplateError as exc:
        raise ScriptGenerationError(f"failed to render {NETWORK_CONF_TEMPLATE}: {exc}") from exc

    leftover = [t for t in PLACEHOLDER_TOKENS if t in script]
    if leftover:
        raise ScriptGenerationError(
            f"unsubstituted placeholders in network configuration script: {', '.join(leftover)}"
        )
    return script


def populate_network_conf_script(
    service_network_cidr: str,
    hns_network: str,
    hns_module_path: str,
    cni_config_path: str,
    path: Union[str, Path] = NETWORK_CONF_SCRIPT,
) -> Path:
    """
    Write the network configuration script to *path*, replacing any previous
    version. The file is left readable and executable by everyone.
    """
    script = generate_network_conf_script(
        service_network_cidr, hns_network, hns_module_path, cni_config_path,
    )
    path = Path(path)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # the target is only ever replaced by a complete, executable file
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(script)
        os.chmod(tmp_name, 0o777)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise PayloadIOError(f"could not write network configuration script {path}: {exc}") from exc
    log.debug("wrote network configuration script %s", path)
    return path
