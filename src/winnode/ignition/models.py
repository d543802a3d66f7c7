# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/winnode/ignition/models.py

from __future__ import annotations

import base64
import binascii
import json
from datetime import datetime
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from winnode.errors import IgnitionParseError


# ------------------------------------------------------------------------------
# Cluster resources
# ------------------------------------------------------------------------------

def _sections(kind: str, obj: Any) -> tuple[Mapping[str, Any], Mapping[str, Any]]:
    """Return the (metadata, spec) mappings of a Kubernetes object."""
    if not isinstance(obj, Mapping):
        raise IgnitionParseError(f"{kind}: expected a mapping, got {type(obj).__name__}")
    metadata = obj.get("metadata") or {}
    spec = obj.get("spec") or {}
    if not isinstance(metadata, Mapping) or not isinstance(spec, Mapping):
        raise IgnitionParseError(f"{kind}: metadata and spec must be mappings")
    return metadata, spec


class MachineConfig(BaseModel):
    """A rendered configuration bundle for a pool of nodes."""

    model_config = ConfigDict(frozen=True)

    name: str
    creation_timestamp: datetime
    raw: bytes = b""   # encoded Ignition payload (spec.config)

    @classmethod
    def from_resource(cls, obj: Mapping[str, Any]) -> "MachineConfig":
        metadata, spec = _sections("MachineConfig", obj)
        config = spec.get("config")
        if config is None:
            raw = b""
        elif isinstance(config, bytes):
            raw = config
        elif isinstance(config, str):
            raw = config.encode("utf-8")
        else:
            raw = json.dumps(config).encode("utf-8")
        try:
            return cls(
                name=metadata.get("name", ""),
                creation_timestamp=metadata.get("creationTimestamp"),
                raw=raw,
            )
        except ValidationError as exc:
            raise IgnitionParseError(
                f"MachineConfig {metadata.get('name', '<unnamed>')}: invalid metadata: {exc}"
            ) from exc


class ControllerConfig(BaseModel):
    """Holds the CA bundle the kubelet uses to trust the API server."""

    model_config = ConfigDict(frozen=True)

    name: str
    kube_apiserver_serving_ca_data: bytes = b""

    @classmethod
    def from_resource(cls, obj: Mapping[str, Any]) -> "ControllerConfig":
        metadata, spec = _sections("ControllerConfig", obj)
        name = metadata.get("name", "")
        value = spec.get("kubeAPIServerServingCAData")
        if not value:
            data = b""
        elif isinstance(value, bytes):
            data = value
        else:
            # []byte fields are base64 encoded on the wire
            try:
                data = base64.b64decode(value, validate=True)
            except (binascii.Error, ValueError) as exc:
                raise IgnitionParseError(
                    f"ControllerConfig {name}: kubeAPIServerServingCAData is not valid base64"
                ) from exc
        return cls(name=name, kube_apiserver_serving_ca_data=data)


# ------------------------------------------------------------------------------
# Ignition spec 3.x (the subset a Windows node consumes)
# ------------------------------------------------------------------------------

class _IgnitionModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class Verification(_IgnitionModel):
    hash: Optional[str] = None


class Resource(_IgnitionModel):
    source: Optional[str] = None
    compression: Optional[str] = None
    verification: Verification = Field(default_factory=Verification)


class File(_IgnitionModel):
    path: str
    contents: Resource = Field(default_factory=Resource)
    mode: Optional[int] = None
    overwrite: Optional[bool] = None


class Dropin(_IgnitionModel):
    name: str
    contents: Optional[str] = None


class Unit(_IgnitionModel):
    name: str
    enabled: Optional[bool] = None
    mask: Optional[bool] = None
    contents: Optional[str] = None
    dropins: List[Dropin] = Field(default_factory=list)


class Systemd(_IgnitionModel):
    units: List[Unit] = Field(default_factory=list)


class Storage(_IgnitionModel):
    files: List[File] = Field(default_factory=list)


class IgnitionMeta(_IgnitionModel):
    version: str


class IgnitionConfig(_IgnitionModel):
    ignition: IgnitionMeta
    storage: Storage = Field(default_factory=Storage)
    systemd: Systemd = Field(default_factory=Systemd)
