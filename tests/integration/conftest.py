# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fixtures for API tests.

The full application is built with create_app(); the store and identity
provider dependencies are replaced with the in-memory doubles. TestClient is
used without a ``with`` block, so the lifespan (database pool) never runs.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from lscmis.api.app import create_app
from lscmis.api.dependencies import get_identity_provider, get_store


@pytest.fixture
def app(store, identity) -> FastAPI:
    """Create the API with in-memory collaborators."""
    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_identity_provider] = lambda: identity
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client returning 500 responses instead of raising."""
    return TestClient(app, raise_server_exceptions=False)
