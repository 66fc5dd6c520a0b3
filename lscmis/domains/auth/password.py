# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Credential hashing for the database identity backend.

Operator and officer passwords are stored as bcrypt digests in the
credentials table. Hashing runs on a worker thread when called from a
provisioning request so the event loop keeps serving other centers.

Example:
    >>> hasher = PasswordHasher(rounds=4)
    >>> digest = hasher.hash("kendra-2025")
    >>> digest.startswith("$2b$04$")
    True
"""

import asyncio

import bcrypt

# bcrypt ignores input beyond 72 bytes and newer releases reject it outright
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    if not password:
        raise ValueError("Password cannot be empty")
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes")
    return encoded


class PasswordHasher:
    """bcrypt hashing with a configurable work factor.

    Args:
        rounds: bcrypt cost. Tests pass 4 to stay fast.
    """

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Return the bcrypt digest of a password.

        Raises:
            ValueError: If the password is empty or over MAX_PASSWORD_BYTES
                once encoded as UTF-8.
        """
        digest = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self._rounds))
        return digest.decode("ascii")

    async def hash_async(self, password: str) -> str:
        """Hash on a worker thread."""
        return await asyncio.to_thread(self.hash, password)
