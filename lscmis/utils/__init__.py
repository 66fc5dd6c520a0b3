# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Cross-cutting helpers: structured logging and UTC timestamps."""

from lscmis.utils.datetime import utc_now
from lscmis.utils.logging import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
    "utc_now",
]
