# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Center application lifecycle: submission, review, credential issuance."""

from lscmis.domains.application.codes import ApplicationCodeGenerator
from lscmis.domains.application.service import ApplicationService

__all__ = ["ApplicationCodeGenerator", "ApplicationService"]
