# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration for lscmis, read from the environment."""

from lscmis.core.config.settings import (
    ApplicationCodeSettings,
    CORSSettings,
    DatabaseSettings,
    IdentitySettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "ApplicationCodeSettings",
    "CORSSettings",
    "DatabaseSettings",
    "IdentitySettings",
    "Settings",
    "clear_settings_cache",
    "get_settings",
]
