"""Pytest configuration and shared fixtures."""

from typing import Dict, Optional

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import Response

from hookrelay.config import set_default_transport
from hookrelay.endpoint import EventContext


def build_stub_app(
    status_code: int = 200,
    body: bytes = b'{"status": "received"}',
    headers: Optional[Dict[str, str]] = None,
) -> FastAPI:
    """Create a local endpoint stub that records every request it receives."""
    app = FastAPI(title="hookrelay-stub")
    app.state.received = []

    @app.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    async def receive(path: str, request: Request):
        app.state.received.append({
            "method": request.method,
            "path": f"/{path}",
            "headers": request.headers,
            "body": await request.body(),
        })
        return Response(content=body, status_code=status_code, headers=headers or {})

    return app


def asgi_client(app: FastAPI, **kwargs) -> httpx.AsyncClient:
    """An httpx client that delivers every request to the given app in-process."""
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), follow_redirects=False, **kwargs)


@pytest.fixture
def stub_app():
    """A stub endpoint answering 200."""
    return build_stub_app()


@pytest.fixture
def make_stub_app():
    """Factory for stub endpoints with custom responses."""
    return build_stub_app


@pytest.fixture
def make_asgi_client():
    """Factory for in-process clients bound to a stub app."""
    return asgi_client


@pytest.fixture
def evt_ctx():
    """A captured webhook event."""
    return EventContext(
        request_body=b'{"id": "evt_123", "type": "customer.created"}',
        request_headers={
            "Content-Type": "application/json",
            "Stripe-Signature": "t=1,v1=abc",
            "User-Agent": "Stripe/1.0",
        },
        webhook_id="we_123",
        event_id="evt_123",
        event_type="customer.created",
    )


@pytest.fixture
def default_transport():
    """Install a process-wide transport for the test and reset it afterwards."""
    def install(client: httpx.AsyncClient) -> httpx.AsyncClient:
        set_default_transport(client)
        return client

    yield install
    set_default_transport(None)


# Markers for test categorization
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
