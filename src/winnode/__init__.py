# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

"""Derive Windows worker node configuration from rendered Linux node configuration."""

__version__ = "0.1.0"
