from types import SimpleNamespace

import httpx
from fastapi.testclient import TestClient

from relay.api.dependencies import get_generation_client, get_http_client, get_settings
from relay.main import create_app
from tests._helpers.fakes import FakeGenerationClient


def test_lifespan_owns_http_client(test_settings):
    app = create_app()
    fake = FakeGenerationClient()
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_generation_client] = lambda: fake

    with TestClient(app) as client:
        http_client = app.state.http_client
        assert isinstance(http_client, httpx.AsyncClient)
        assert not http_client.is_closed

        resp = client.post("/", json={"prompt": "worker"})
        assert resp.status_code == 200
        assert resp.json() == {"blueprint": "root\n\tworker"}
        assert fake.prompts == ["worker"]

    assert app.state.http_client is None
    assert http_client.is_closed


def test_lazy_http_client_is_reused():
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace()))

    first = get_http_client(request)
    second = get_http_client(request)

    assert isinstance(first, httpx.AsyncClient)
    assert first is second
    assert request.app.state.http_client is first


def test_lifespan_closes_lazily_created_client(test_settings):
    app = create_app()
    lazy = get_http_client(SimpleNamespace(app=app))

    with TestClient(app):
        assert app.state.http_client is lazy

    assert lazy.is_closed
