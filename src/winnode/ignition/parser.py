# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/winnode/ignition/parser.py
"""
Decode an Ignition payload into an ``IgnitionConfig``.

Any spec 3.x config up to 3.5.0 is accepted, since 3.5 is a superset of the
earlier 3.x versions for the fields a Windows node reads. Problems are
collected into a ``Report``; callers treat a report with an error entry as a
defective bundle.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Tuple

from pydantic import ValidationError

from winnode.errors import IgnitionParseError
from winnode.ignition.models import IgnitionConfig

MAX_SUPPORTED_VERSION = (3, 5, 0)

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)(?:-([0-9A-Za-z.-]+))?$")
_KNOWN_TOP_LEVEL_KEYS = {"ignition", "kernelArguments", "passwd", "storage", "systemd"}


class EntryKind(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ReportEntry:
    kind: EntryKind
    message: str
    path: str = ""

    def __str__(self) -> str:
        where = f"{self.path}: " if self.path else ""
        return f"{self.kind.value}: {where}{self.message}"


@dataclass
class Report:
    entries: List[ReportEntry] = field(default_factory=list)

    def add(self, kind: EntryKind, message: str, path: str = "") -> None:
        self.entries.append(ReportEntry(kind=kind, message=message, path=path))

    def is_fatal(self) -> bool:
        return any(e.kind is EntryKind.ERROR for e in self.entries)

    def __str__(self) -> str:
        return "\n".join(str(e) for e in self.entries)


def _parse_version(version: Any) -> Tuple[int, int, int, str] | None:
    if not isinstance(version, str):
        return None
    m = _VERSION_RE.match(version)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2)), int(m.group(3)), m.group(4) or ""


def _check_version(data: dict, report: Report) -> None:
    meta = data.get("ignition")
    version = meta.get("version") if isinstance(meta, dict) else None
    if version is None:
        report.add(EntryKind.ERROR, "config has no version", "ignition.version")
        return

    parsed = _parse_version(version)
    if parsed is None:
        report.add(EntryKind.ERROR, f"invalid version {version!r}", "ignition.version")
        return

    major, minor, patch, pre = parsed
    if major != 3:
        report.add(EntryKind.ERROR, f"unsupported config version {version}", "ignition.version")
    elif pre:
        report.add(EntryKind.ERROR, f"experimental config version {version} is not supported", "ignition.version")
    elif (major, minor, patch) > MAX_SUPPORTED_VERSION:
        report.add(EntryKind.ERROR, f"config version {version} is newer than supported", "ignition.version")


def _check_duplicates(config: IgnitionConfig, report: Report) -> None:
    seen_paths = set()
    for i, f in enumerate(config.storage.files):
        if f.path in seen_paths:
            report.add(EntryKind.ERROR, f"duplicate file path {f.path}", f"storage.files.{i}")
        seen_paths.add(f.path)

    seen_units = set()
    for i, unit in enumerate(config.systemd.units):
        if unit.name in seen_units:
            report.add(EntryKind.ERROR, f"duplicate unit name {unit.name}", f"systemd.units.{i}")
        seen_units.add(unit.name)


def parse_compatible_version(raw: bytes) -> Tuple[IgnitionConfig | None, Report]:
    """
    Parse raw Ignition JSON.

    Returns the config and a report. The config is None whenever the report is
    fatal. Undecodable input raises ``IgnitionParseError``.
    """
    report = Report()
    if not raw:
        raise IgnitionParseError("empty Ignition payload")

    try:
        data = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as exc:
        raise IgnitionParseError(f"Ignition payload is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise IgnitionParseError("Ignition payload is not a JSON object")

    _check_version(data, report)
    if report.is_fatal():
        return None, report

    for key in sorted(set(data) - _KNOWN_TOP_LEVEL_KEYS):
        report.add(EntryKind.WARNING, "unused key", key)

    try:
        config = IgnitionConfig.model_validate(data)
    except ValidationError as exc:
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ()))
            report.add(EntryKind.ERROR, err.get("msg", "invalid value"), loc)
        return None, report

    _check_duplicates(config, report)
    if report.is_fatal():
        return None, report
    return config, report
