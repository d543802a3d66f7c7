# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/winnode/errors.py
from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from winnode.ignition.parser import Report


class WinnodeError(RuntimeError):
    """Base class for configuration derivation failures."""


class NotFoundError(WinnodeError):
    """Raised when an authoritative resource (bundle, CA, file) is absent."""


class IgnitionParseError(WinnodeError):
    """Raised when a bundle payload is malformed or decodes with a fatal report."""

    def __init__(self, message: str, report: Optional["Report"] = None):
        if report is not None and report.entries:
            message = f"{message}\nReport: {report}"
        super().__init__(message)
        self.report = report


class MissingFieldError(WinnodeError):
    """Raised when an expected unit or ExecStart section is absent."""


class PayloadIOError(WinnodeError):
    """Raised when a payload file cannot be read or written."""


class ScriptGenerationError(WinnodeError):
    """Raised when the network configuration script cannot be rendered."""


class ConfigError(WinnodeError):
    """Raised when the winnode config file cannot be read or does not validate."""
