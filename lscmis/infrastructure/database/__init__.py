# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure for PostgreSQL connections.

Example:
    from lscmis.infrastructure.database import init_database, get_sessionmaker

    await init_database(settings)
    sessionmaker = get_sessionmaker()
"""

from lscmis.infrastructure.database.connection import (
    DatabaseError,
    IntegrityViolationError,
    check_database_connection,
    close_database,
    create_sessionmaker,
    get_sessionmaker,
    init_database,
)

__all__ = [
    "DatabaseError",
    "IntegrityViolationError",
    "check_database_connection",
    "close_database",
    "create_sessionmaker",
    "get_sessionmaker",
    "init_database",
]
