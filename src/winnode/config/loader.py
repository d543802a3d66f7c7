# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/winnode/config/loader.py

import logging
import os
import yaml
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from winnode.errors import ConfigError, NotFoundError
from .models import WinnodeConfig

log = logging.getLogger("winnode")

CONFIG_ENV = "WINNODE_CONFIG"


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    try:
        raw = path.read_text()
    except OSError as exc:
        raise ConfigError(f"could not read config file {path}: {exc}") from exc
    expanded = os.path.expandvars(raw)
    try:
        data = yaml.safe_load(expanded) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"config file {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def load_config(path: Optional[Union[str, Path]] = None) -> WinnodeConfig:
    """
    Load and validate a winnode YAML config.

    Discovery order:
      1. *path*, when given
      2. ``WINNODE_CONFIG`` env var
      3. built-in defaults

    ``${ENV_VAR}`` placeholders are resolved with ``os.path.expandvars``.
    """
    if path is None:
        env = os.environ.get(CONFIG_ENV)
        if not env:
            log.debug("No config file given, using defaults")
            return WinnodeConfig()
        path = env

    path = Path(path)
    if not path.is_file():
        raise NotFoundError(f"config file {path} does not exist")
    log.debug("Loading config from %s", path)
    try:
        return WinnodeConfig.model_validate(_load_yaml(path))
    except ValidationError as exc:
        raise ConfigError(f"invalid config file {path}:\n{exc}") from exc
