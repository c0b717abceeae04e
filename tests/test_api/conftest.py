"""FastAPI test client fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from topiko.api.app import include_routes, init_state
from topiko.api.middleware import CorrelationIdMiddleware, add_exception_handlers

if TYPE_CHECKING:
    from topiko.config import Settings


def _create_test_app(settings: Settings) -> FastAPI:
    """Create a FastAPI app with injected test settings (no lifespan)."""
    app = FastAPI(title="Topiko Test")

    init_state(app, settings)

    app.add_middleware(CorrelationIdMiddleware)
    add_exception_handlers(app)
    include_routes(app)

    return app


@pytest.fixture()
def client(settings: Settings) -> TestClient:
    """Client with no SMS key and no analytics store configured."""
    app = _create_test_app(settings)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def live_client(live_settings: Settings) -> TestClient:
    """Client whose SMS gateway and analytics store must be mocked with respx."""
    app = _create_test_app(live_settings)
    return TestClient(app, raise_server_exceptions=False)
