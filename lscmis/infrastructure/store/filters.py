# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Filter predicates accepted by the relational store.

A filter is either a mapping (equality on every key) or a sequence of
predicates built with the helpers below:

    await store.select_many(
        Collection.SERVICE_TRANSACTIONS,
        [eq("lsc_id", center_id), gte("service_start_date", from_date)],
    )
"""

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Sequence, Union

Operator = Literal["eq", "gte", "lte", "in", "is_null"]


@dataclass(frozen=True)
class Predicate:
    """A single column condition."""

    column: str
    op: Operator
    value: Any = None


Filters = Union[Mapping[str, Any], Sequence[Predicate], None]


def eq(column: str, value: Any) -> Predicate:
    return Predicate(column, "eq", value)


def gte(column: str, value: Any) -> Predicate:
    return Predicate(column, "gte", value)


def lte(column: str, value: Any) -> Predicate:
    return Predicate(column, "lte", value)


def in_(column: str, values: Sequence[Any]) -> Predicate:
    return Predicate(column, "in", tuple(values))


def is_null(column: str) -> Predicate:
    return Predicate(column, "is_null")


def normalize_filters(filters: Filters) -> list[Predicate]:
    """Turn any accepted filter form into a list of predicates."""
    if filters is None:
        return []
    if isinstance(filters, Mapping):
        return [eq(column, value) for column, value in filters.items()]
    return list(filters)
