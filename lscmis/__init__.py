"""lscmis Backend.

Management information system for regional service centers: center
onboarding, application review, service catalog and beneficiary
transactions.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
