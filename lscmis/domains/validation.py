# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Input checks shared by the onboarding workflows.

All of these run before a workflow mutates anything. The async checks only
read from the store.
"""

import re
from typing import Any, Iterable, Sequence

from lscmis.domains.errors import ValidationError
from lscmis.domains.workflow import translate_errors
from lscmis.infrastructure.store import Collection, RelationalStore, in_

MISSING_FIELDS = "Missing required fields"

_CONTACT_PATTERN = re.compile(r"^\d{10,}$")


def require(*values: Any) -> None:
    """Raise ValidationError unless every value is present and non-blank."""
    for value in values:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(MISSING_FIELDS)


def check_password(password: str, min_length: int) -> None:
    if len(password) < min_length:
        raise ValidationError(f"Password must be at least {min_length} characters")


def check_contact(contact: str | None) -> None:
    """Contact numbers, when given, are at least ten digits."""
    if contact is not None and not _CONTACT_PATTERN.match(contact):
        raise ValidationError("Contact number must be at least 10 digits")


def unique_ids(ids: Iterable[str]) -> list[str]:
    """Drop blanks and repeats, keeping the first occurrence order."""
    return list(dict.fromkeys(i for i in ids if i))


async def check_scope(
    store: RelationalStore, district_id: str | None, block_id: str | None
) -> None:
    """Check that the district exists and the block lies inside it.

    Either argument may be None, in which case only the other is checked.
    """
    with translate_errors():
        if district_id is not None:
            if await store.count(Collection.DISTRICTS, {"id": district_id}) == 0:
                raise ValidationError("Unknown district")
        if block_id is not None:
            block = await store.select_one(Collection.BLOCKS, {"id": block_id})
            if block is None:
                raise ValidationError("Unknown block")
            if district_id is not None and block.district_id != district_id:
                raise ValidationError("Block does not belong to the selected district")


async def check_service_items(store: RelationalStore, item_ids: Sequence[str]) -> None:
    """Every ID must name an existing, active service item."""
    if not item_ids:
        return
    with translate_errors():
        items = await store.select_many(Collection.SERVICE_ITEMS, [in_("id", item_ids)])
    if len(items) != len(item_ids):
        raise ValidationError("Unknown service item selected")
    if not all(item.is_active for item in items):
        raise ValidationError("Inactive service item selected")
