# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Workflow error taxonomy.

Every workflow ends in either a result or exactly one of these errors.
Transport errors from the store or the identity provider never leave a
workflow untranslated.

- ValidationError: bad or missing input; nothing external was touched
- AuthError: the identity provider failed or refused
- StoreError: the relational store failed
- ConflictError: a referential guard refused the change
- InvalidTransitionError: the application is not in a state that allows it
- StaleCodeError: the application code does not match or was already used
- CodeGenerationError: no free application code within the configured attempts
- NotFoundError: a referenced entity does not exist
"""


class WorkflowError(Exception):
    """Base exception for workflow errors.

    Attributes:
        message: Human-readable error description, safe to return to callers.
        details: Optional dictionary with additional error context.
        rollback_failures: Names of compensation steps that failed while
            undoing a partially applied workflow.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        self.rollback_failures: list[str] = []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ValidationError(WorkflowError):
    """Raised when input is missing or malformed."""

    pass


class AuthError(WorkflowError):
    """Raised when the identity provider fails a request."""

    pass


class StoreError(WorkflowError):
    """Raised when the relational store fails a request."""

    pass


class ConflictError(WorkflowError):
    """Raised when an entity is still referenced by others."""

    pass


class InvalidTransitionError(ConflictError):
    """Raised when an application cannot move to the requested state."""

    pass


class StaleCodeError(WorkflowError):
    """Raised when an application code is wrong or already consumed."""

    pass


class CodeGenerationError(WorkflowError):
    """Raised when every application code candidate collided."""

    pass


class NotFoundError(WorkflowError):
    """Raised when a referenced entity does not exist."""

    pass
