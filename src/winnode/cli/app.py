# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/winnode/cli/app.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

import typer
from kubernetes.client.rest import ApiException
from kubernetes.config import ConfigException

from winnode.config.loader import load_config
from winnode.config.models import WinnodeConfig
from winnode.errors import WinnodeError
from winnode.ignition.ignition import Ignition
from winnode.ignition.models import ControllerConfig, MachineConfig
from winnode.k8s.client import load_custom_objects_api, read_resource_file
from winnode.logging.log import init_logging
from winnode.payload.fileinfo import new_file_info
from winnode.payload.network_conf import populate_network_conf_script
from winnode.payload.paths import payload_files
from winnode.utils.retry import RetryError

log = logging.getLogger("winnode")


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="Derive Windows worker node configuration from rendered worker config")


@contextmanager
def _abort_on_error():
    try:
        yield
    except (WinnodeError, RetryError, ApiException, ConfigException) as exc:
        log.error("%s", exc)
        raise typer.Exit(code=1)


def _cfg(ctx: typer.Context) -> WinnodeConfig:
    return ctx.obj["config"]


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", help="winnode config YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log DEBUG to the console"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Directory for run logs"),
):
    try:
        cfg = load_config(config)
    except WinnodeError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)
    init_logging(base_dir=log_dir or cfg.log_dir, verbose=verbose)
    ctx.obj = {"config": cfg}


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------

def _build_ignition(
    cfg: WinnodeConfig,
    machine_configs: Optional[Path],
    controller_configs: Optional[Path],
    kube_context: Optional[str],
) -> Ignition:
    if machine_configs or controller_configs:
        if not (machine_configs and controller_configs):
            raise typer.BadParameter(
                "--machine-configs and --controller-configs must be given together"
            )
        mcs = [MachineConfig.from_resource(o) for o in read_resource_file(machine_configs)]
        ccs = [ControllerConfig.from_resource(o) for o in read_resource_file(controller_configs)]
        return Ignition.from_resources(mcs, ccs)

    api = load_custom_objects_api(kube_context or cfg.kube_context)
    return Ignition.from_cluster(api)


_MC_OPTION = typer.Option(None, "--machine-configs", help="MachineConfig dump (YAML/JSON) instead of the cluster")
_CC_OPTION = typer.Option(None, "--controller-configs", help="ControllerConfig dump (YAML/JSON) instead of the cluster")
_CONTEXT_OPTION = typer.Option(None, "--context", help="kubeconfig context")


# ------------------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------------------

@app.command("kubelet-args")
def kubelet_args(
    ctx: typer.Context,
    machine_configs: Optional[Path] = _MC_OPTION,
    controller_configs: Optional[Path] = _CC_OPTION,
    context: Optional[str] = _CONTEXT_OPTION,
    service: Optional[str] = typer.Option(None, "--service", help="systemd unit to read args from"),
):
    """Print the kubelet args a Windows node takes over, one --key=value per line."""
    cfg = _cfg(ctx)
    with _abort_on_error():
        ign = _build_ignition(cfg, machine_configs, controller_configs, context)
        args = ign.service_args(service or cfg.kubelet_service)
    for key in sorted(args):
        typer.echo(f"--{key}={args[key]}")


@app.command("kubelet-ca")
def kubelet_ca(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the CA bundle here"),
    machine_configs: Optional[Path] = _MC_OPTION,
    controller_configs: Optional[Path] = _CC_OPTION,
    context: Optional[str] = _CONTEXT_OPTION,
):
    """Write the kubelet CA bundle."""
    cfg = _cfg(ctx)
    with _abort_on_error():
        ign = _build_ignition(cfg, machine_configs, controller_configs, context)
    data = ign.kubelet_ca_data
    if output is None:
        typer.echo(data.decode("utf-8", errors="replace"), nl=False)
        return
    try:
        output.write_bytes(data)
    except OSError as exc:
        log.error("could not write kubelet-ca to %s: %s", output, exc)
        raise typer.Exit(code=1)
    log.info("wrote kubelet-ca to %s", output)


@app.command("file-contents")
def file_contents(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Path of the file inside the Ignition config"),
    machine_configs: Optional[Path] = _MC_OPTION,
    controller_configs: Optional[Path] = _CC_OPTION,
    context: Optional[str] = _CONTEXT_OPTION,
):
    """Print a file embedded in the rendered worker config (e.g. /etc/kubernetes/cloud.conf)."""
    cfg = _cfg(ctx)
    with _abort_on_error():
        ign = _build_ignition(cfg, machine_configs, controller_configs, context)
        data = ign.get_file_contents(path)
    typer.echo(data.decode("utf-8", errors="replace"), nl=False)


@app.command("network-script")
def network_script(
    ctx: typer.Context,
    service_cidr: Optional[str] = typer.Option(None, "--service-cidr", help="Cluster service network CIDR"),
    hns_network: Optional[str] = typer.Option(None, "--hns-network"),
    hns_module: Optional[str] = typer.Option(None, "--hns-module", help="HNS PowerShell module path on the node"),
    cni_config: Optional[str] = typer.Option(None, "--cni-config", help="CNI config path on the node"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
):
    """Generate the network configuration PowerShell script."""
    cfg = _cfg(ctx)
    net = cfg.network
    service_cidr = service_cidr or net.service_cidr
    if not service_cidr:
        raise typer.BadParameter("--service-cidr is required when network.service_cidr is not configured")

    with _abort_on_error():
        path = populate_network_conf_script(
            service_cidr,
            hns_network or net.hns_network,
            hns_module or net.hns_module_path,
            cni_config or net.cni_config_path,
            path=output or cfg.network_conf_script,
        )
    log.info("network configuration script written to %s", path)


@app.command()
def fingerprint(
    ctx: typer.Context,
    paths: Optional[List[Path]] = typer.Argument(None, help="Files to fingerprint (default: payload files)"),
):
    """Print '<sha256>  <path>' for each file."""
    cfg = _cfg(ctx)
    if not paths:
        paths = [p for p in payload_files(cfg.payload_dir) if p.is_file()]
        log.debug("fingerprinting %d payload files under %s", len(paths), cfg.payload_dir)
    with _abort_on_error():
        for p in paths:
            info = new_file_info(p)
            typer.echo(f"{info.sha256}  {info.path}")


def run():
    app()


if __name__ == "__main__":
    run()
