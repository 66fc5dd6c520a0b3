# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Compensating-step runner shared by the multi-entity workflows."""

from lscmis.domains.workflow.saga import (
    Saga,
    SagaContext,
    SagaResult,
    SagaStep,
    translate_error,
    translate_errors,
)

__all__ = [
    "Saga",
    "SagaContext",
    "SagaResult",
    "SagaStep",
    "translate_error",
    "translate_errors",
]
