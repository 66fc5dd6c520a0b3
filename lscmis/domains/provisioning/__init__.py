# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin provisioning of centers and officer accounts."""

from lscmis.domains.provisioning.service import OFFICER_ROLES, ProvisioningService

__all__ = ["OFFICER_ROLES", "ProvisioningService"]
