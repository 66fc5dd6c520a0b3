# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application code generation.

A code is a random integer from the configured range shifted by the current
number of centers, so codes drift upward as the registry grows. Each draw is
checked against existing centers and every draw counts as one attempt,
including draws whose center insert later loses a race on the unique
constraint.
"""

import logging
import random
from typing import AsyncIterator

from lscmis.core.config.settings import ApplicationCodeSettings
from lscmis.infrastructure.store import Collection, RelationalStore

logger = logging.getLogger(__name__)


class ApplicationCodeGenerator:
    """Yield application codes that are free at the time of the check.

    Attributes:
        range_start: Smallest random base (inclusive).
        range_end: Largest random base (exclusive).
        max_attempts: Number of draws before giving up.
    """

    def __init__(
        self,
        store: RelationalStore,
        settings: ApplicationCodeSettings,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._rng = rng or random.SystemRandom()
        self.range_start = settings.range_start
        self.range_end = settings.range_end
        self.max_attempts = settings.max_attempts

    async def free_codes(self) -> AsyncIterator[str]:
        """Draw up to ``max_attempts`` candidates, yielding those not in use.

        The caller stops iterating once a code has been claimed; running out
        of the iterator means the attempts were exhausted.
        """
        offset = await self._store.count(Collection.CENTERS)

        for attempt in range(1, self.max_attempts + 1):
            candidate = str(self._rng.randrange(self.range_start, self.range_end) + offset)
            taken = await self._store.count(
                Collection.CENTERS, {"application_code": candidate}
            )
            if not taken:
                yield candidate
            else:
                logger.debug("Application code collision on attempt %d", attempt)
