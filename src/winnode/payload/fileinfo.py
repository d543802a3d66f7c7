# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/winnode/payload/fileinfo.py

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from winnode.errors import PayloadIOError


@dataclass(frozen=True)
class FileInfo:
    """A payload file and the SHA-256 of its contents."""
    path: str
    sha256: str


def new_file_info(path: Union[str, Path]) -> FileInfo:
    """
    Fingerprint the file at *path*.

    The digest depends only on the file's bytes, never on its name or metadata.
    """
    try:
        contents = Path(path).read_bytes()
    except OSError as exc:
        raise PayloadIOError(f"could not get contents of file {path}: {exc}") from exc
    return FileInfo(path=str(path), sha256=hashlib.sha256(contents).hexdigest())
