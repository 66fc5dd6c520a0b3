# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Ordered steps with compensating actions.

The store offers no transaction spanning several calls, so a multi-entity
workflow is expressed as a saga: each step is an action paired with the
compensation that undoes it. When a step fails, the compensations of the
steps that already completed run in reverse order, then the failure is
raised as a WorkflowError.

Compensation is best effort. A compensation that fails is logged as a
rollback failure and recorded on the raised error; the remaining
compensations still run and the primary error is unchanged.

Example:
    >>> saga = Saga("provision_center")
    >>> saga.step("credential", create_credential, compensation=delete_credential)
    >>> saga.step("center", insert_center, compensation=delete_center)
    >>> result = await saga.run()
    >>> result.context["center"].id
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterator

from lscmis.domains.errors import AuthError, StoreError, WorkflowError
from lscmis.infrastructure.database.connection import DatabaseError
from lscmis.infrastructure.identity.base import IdentityProviderError

logger = logging.getLogger(__name__)

SagaContext = dict[str, Any]
Action = Callable[[SagaContext], Awaitable[Any]]


def translate_error(exc: BaseException) -> BaseException:
    """Map a transport error onto the workflow taxonomy.

    WorkflowErrors and unexpected exceptions are returned unchanged.
    """
    if isinstance(exc, WorkflowError):
        return exc
    if isinstance(exc, IdentityProviderError):
        return AuthError(exc.message, details={"status_code": exc.status_code})
    if isinstance(exc, DatabaseError):
        return StoreError(exc.message)
    return exc


@contextmanager
def translate_errors() -> Iterator[None]:
    """Translate transport errors raised inside the block.

    For operations that are a single store or identity call and need no
    compensation.
    """
    try:
        yield
    except (DatabaseError, IdentityProviderError) as e:
        raise translate_error(e) from e


@dataclass
class SagaStep:
    """One forward action and the action that undoes it."""

    name: str
    action: Action
    compensation: Action | None = None


@dataclass
class SagaResult:
    """Outcome of a successful run."""

    context: SagaContext
    completed: list[str] = field(default_factory=list)


class Saga:
    """Run steps in order and compensate completed ones on failure.

    Attributes:
        name: Workflow name used in log lines.
        context: Shared values; each step's result is stored under its name.
    """

    def __init__(self, name: str, context: SagaContext | None = None) -> None:
        self.name = name
        self.context: SagaContext = dict(context or {})
        self._steps: list[SagaStep] = []

    def step(self, name: str, action: Action, compensation: Action | None = None) -> "Saga":
        """Append a step. Returns the saga so calls can be chained."""
        if any(existing.name == name for existing in self._steps):
            raise ValueError(f"Duplicate saga step: {name}")
        self._steps.append(SagaStep(name, action, compensation))
        return self

    async def run(self) -> SagaResult:
        """Execute every step.

        Returns:
            The shared context with every step's result and the completed step names.

        Raises:
            WorkflowError: Translated failure of the first failing step,
                after compensation.
            Exception: Any unexpected error, after compensation.
        """
        completed: list[SagaStep] = []

        for step in self._steps:
            try:
                self.context[step.name] = await step.action(self.context)
            except Exception as exc:
                logger.warning(
                    "%s failed at step %s: %s", self.name, step.name, exc
                )
                rollback_failures = await self._compensate(completed)
                translated = translate_error(exc)
                if isinstance(translated, WorkflowError):
                    translated.rollback_failures = rollback_failures
                if translated is exc:
                    raise
                raise translated from exc

            logger.info("%s completed step %s", self.name, step.name)
            completed.append(step)

        return SagaResult(self.context, [step.name for step in completed])

    async def _compensate(self, completed: list[SagaStep]) -> list[str]:
        """Undo completed steps in reverse order. Returns the names that failed."""
        failures: list[str] = []

        for step in reversed(completed):
            if step.compensation is None:
                continue
            try:
                await step.compensation(self.context)
                logger.warning("%s rolled back step %s", self.name, step.name)
            except Exception as e:
                failures.append(step.name)
                logger.error(
                    "%s rollback failed for step %s: %s", self.name, step.name, e
                )

        return failures
