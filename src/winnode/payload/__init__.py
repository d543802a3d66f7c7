# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

from winnode.payload.fileinfo import FileInfo, new_file_info
from winnode.payload.network_conf import generate_network_conf_script, populate_network_conf_script
from winnode.payload.paths import NETWORK_CONF_SCRIPT, PAYLOAD_DIR, payload_files

__all__ = [
    "FileInfo",
    "NETWORK_CONF_SCRIPT",
    "PAYLOAD_DIR",
    "generate_network_conf_script",
    "new_file_info",
    "payload_files",
    "populate_network_conf_script",
]
