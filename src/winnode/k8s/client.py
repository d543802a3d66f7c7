# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/winnode/k8s/client.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from kubernetes import client, config
from kubernetes.client.rest import ApiException

from winnode.errors import IgnitionParseError, NotFoundError, PayloadIOError
from winnode.ignition.models import ControllerConfig, MachineConfig
from winnode.utils.retry import retry

log = logging.getLogger("winnode")

MCO_GROUP = "machineconfiguration.openshift.io"
MCO_VERSION = "v1"
MACHINE_CONFIGS = "machineconfigs"
CONTROLLER_CONFIGS = "controllerconfigs"

LIST_RETRIES = 3
LIST_RETRY_DELAY = 2


def load_custom_objects_api(kube_context: Optional[str] = None) -> client.CustomObjectsApi:
    """Load kubeconfig (falling back to the in-cluster config) and return a CustomObjectsApi."""
    try:
        if kube_context:
            config.load_kube_config(context=kube_context)
        else:
            config.load_kube_config()
    except config.ConfigException:
        if kube_context:
            raise
        log.debug("no kubeconfig found, using in-cluster config")
        config.load_incluster_config()
    return client.CustomObjectsApi()


def _is_transient(exc: Exception) -> bool:
    # no status means the request never got an answer
    status = getattr(exc, "status", None)
    return status is None or status == 429 or status >= 500


def _log_retry(attempt: int, exc: Exception) -> None:
    log.warning("listing %s failed (attempt %d/%d): %s", MCO_GROUP, attempt, LIST_RETRIES, exc)


@retry(
    retries=LIST_RETRIES,
    delay=LIST_RETRY_DELAY,
    retry_on=(ApiException,),
    transient=_is_transient,
    on_retry=_log_retry,
)
def _list_cluster_objects(api, plural: str) -> List[Dict[str, Any]]:
    resp = api.list_cluster_custom_object(group=MCO_GROUP, version=MCO_VERSION, plural=plural)
    return list(resp.get("items") or [])


def list_machine_configs(api) -> List[MachineConfig]:
    items = _list_cluster_objects(api, MACHINE_CONFIGS)
    log.debug("listed %d MachineConfigs", len(items))
    return [MachineConfig.from_resource(obj) for obj in items]


def list_controller_configs(api) -> List[ControllerConfig]:
    items = _list_cluster_objects(api, CONTROLLER_CONFIGS)
    log.debug("listed %d ControllerConfigs", len(items))
    return [ControllerConfig.from_resource(obj) for obj in items]


def read_resource_file(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Load Kubernetes objects dumped with ``oc get -o yaml`` / ``-o json``.

    Accepts a single object, a ``kind: List`` wrapper, a bare list, or a
    multi-document YAML stream.
    """
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(f"resource file {path} does not exist")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PayloadIOError(f"could not read resource file {path}: {exc}") from exc

    try:
        if path.suffix == ".json":
            docs = [json.loads(text)]
        else:
            docs = list(yaml.safe_load_all(text))
    except (ValueError, yaml.YAMLError) as exc:
        raise IgnitionParseError(f"could not parse resource file {path}: {exc}") from exc

    objects: List[Dict[str, Any]] = []
    for doc in docs:
        if not doc:
            continue
        if isinstance(doc, list):
            objects.extend(doc)
        elif isinstance(doc, dict) and "items" in doc and str(doc.get("kind", "")).endswith("List"):
            objects.extend(doc.get("items") or [])
        else:
            objects.append(doc)

    for i, obj in enumerate(objects):
        if not isinstance(obj, dict):
            raise IgnitionParseError(
                f"could not parse resource file {path}: object {i} is a {type(obj).__name__}, not a mapping"
            )
    return objects
