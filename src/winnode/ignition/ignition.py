# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/winnode/ignition/ignition.py

from __future__ import annotations

import base64
import binascii
import gzip
import logging
from typing import AbstractSet, Dict, List, Sequence
from urllib.parse import unquote_to_bytes

from winnode.errors import IgnitionParseError, MissingFieldError, NotFoundError
from winnode.ignition.kubelet_args import WINDOWS_KUBELET_OPTIONS, parse_kubelet_args
from winnode.ignition.models import ControllerConfig, File, IgnitionConfig, MachineConfig
from winnode.ignition.parser import parse_compatible_version
from winnode.ignition.selector import get_latest_rendered_worker

log = logging.getLogger("winnode")

# systemd service the kubelet runs under; its ExecStart carries the kubelet args
KUBELET_SYSTEMD_NAME = "kubelet.service"
# cloud config file as written by Ignition
CLOUD_CONFIG_PATH = "/etc/kubernetes/cloud.conf"
# ecr credential provider config as written by Ignition
ECR_CREDENTIAL_PROVIDER_CONFIG_PATH = "/etc/kubernetes/credential-providers/ecr-credential-provider.yaml"


def find_kubelet_ca(controller_configs: Sequence[ControllerConfig]) -> bytes:
    """
    Return the kubelet CA from the first ControllerConfig that carries one.

    A cluster normally has a single ControllerConfig. More than one candidate
    is tolerated but logged, since it may hide a misconfiguration.
    """
    candidates = [cc for cc in controller_configs if cc.kube_apiserver_serving_ca_data]
    if not candidates:
        raise NotFoundError("cannot find kubelet-ca")
    if len(candidates) > 1:
        log.warning(
            "found %d ControllerConfigs with kubelet-ca (%s), using %s",
            len(candidates),
            ", ".join(cc.name for cc in candidates),
            candidates[0].name,
        )
    log.debug("processing kubelet-ca from ControllerConfig %s", candidates[0].name)
    return candidates[0].kube_apiserver_serving_ca_data


def decode_file_contents(f: File) -> bytes:
    """Decode the ``data:`` URL source of an Ignition file entry."""
    source = f.contents.source
    if source is None:
        return b""
    if not source.startswith("data:"):
        raise IgnitionParseError(f"{f.path}: unsupported contents source scheme")

    header, sep, payload = source[len("data:"):].partition(",")
    if not sep:
        raise IgnitionParseError(f"{f.path}: malformed data URL")
    if header.endswith(";base64"):
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise IgnitionParseError(f"{f.path}: invalid base64 contents") from exc
    else:
        data = unquote_to_bytes(payload)

    compression = f.contents.compression or ""
    if compression == "gzip":
        try:
            data = gzip.decompress(data)
        except (OSError, EOFError) as exc:
            raise IgnitionParseError(f"{f.path}: invalid gzip contents") from exc
    elif compression:
        raise IgnitionParseError(f"{f.path}: unsupported compression {compression!r}")
    return data


class Ignition:
    """
    Read-only view over a parsed rendered worker config and the kubelet CA.
    """

    def __init__(self, config: IgnitionConfig, kubelet_ca_data: bytes):
        self._config = config
        self._kubelet_ca_data = kubelet_ca_data

    @classmethod
    def from_bundle(
        cls,
        bundle: MachineConfig,
        controller_configs: Sequence[ControllerConfig],
    ) -> "Ignition":
        config, report = parse_compatible_version(bundle.raw)
        if config is None or report.is_fatal():
            raise IgnitionParseError(f"failed to parse MachineConfig {bundle.name} ignition", report)
        for entry in report.entries:
            log.debug("MachineConfig %s: %s", bundle.name, entry)
        log.debug(
            "parsed machineconfig=%s using ignition version %s",
            bundle.name,
            config.ignition.version,
        )
        return cls(config, find_kubelet_ca(controller_configs))

    @classmethod
    def from_resources(
        cls,
        machine_configs: Sequence[MachineConfig],
        controller_configs: Sequence[ControllerConfig],
    ) -> "Ignition":
        return cls.from_bundle(get_latest_rendered_worker(machine_configs), controller_configs)

    @classmethod
    def from_cluster(cls, api) -> "Ignition":
        """Build from the MachineConfigs and ControllerConfigs listed through *api*."""
        from winnode.k8s.client import list_controller_configs, list_machine_configs

        return cls.from_resources(list_machine_configs(api), list_controller_configs(api))

    @property
    def version(self) -> str:
        return self._config.ignition.version

    @property
    def kubelet_ca_data(self) -> bytes:
        return self._kubelet_ca_data

    @property
    def files(self) -> List[File]:
        return list(self._config.storage.files)

    def get_file(self, path: str) -> File:
        for f in self._config.storage.files:
            if f.path == path:
                return f
        raise NotFoundError(f"ignition has no file {path}")

    def get_file_contents(self, path: str) -> bytes:
        return decode_file_contents(self.get_file(path))

    def service_args(
        self,
        service_name: str,
        allowed: AbstractSet[str] = WINDOWS_KUBELET_OPTIONS,
    ) -> Dict[str, str]:
        """Allow-listed ``--key=value`` args from the ExecStart of *service_name*."""
        unit = next((u for u in self._config.systemd.units if u.name == service_name), None)
        if unit is None or not unit.contents:
            raise MissingFieldError(f"ignition missing {service_name} systemd unit file")
        try:
            return parse_kubelet_args(unit.contents, allowed)
        except MissingFieldError as exc:
            raise MissingFieldError(f"error parsing {service_name} systemd unit args: {exc}") from exc

    def get_kubelet_args(self) -> Dict[str, str]:
        """Arguments for kubelet.exe, as specified in the rendered worker config."""
        return self.service_args(KUBELET_SYSTEMD_NAME)
