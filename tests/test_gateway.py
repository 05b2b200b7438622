import httpx
import pytest

from chat_proxy.gateway import create_app
from chat_proxy.models import UpstreamResult


class FakeUpstreamClient:
    def __init__(self):
        self.messages = []

    async def complete(self, message, system_instruction):
        self.messages.append(message)
        return UpstreamResult.success("5 years.")


def _client(app) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.mark.asyncio
async def test_chat_round_trip(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGIN", "https://portfolio.test")
    upstream = FakeUpstreamClient()
    app = create_app(upstream_client=upstream)
    async with _client(app) as client:
        resp = await client.post("/api/chat", json={"message": "What is your experience?"})

    assert resp.status_code == 200
    assert resp.json() == {"reply": "5 years."}
    assert resp.headers["access-control-allow-origin"] == "https://portfolio.test"
    assert resp.headers["content-type"] == "application/json"
    assert upstream.messages == ["What is your experience?"]


@pytest.mark.asyncio
async def test_preflight_and_rejections(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGIN", "https://portfolio.test")
    upstream = FakeUpstreamClient()
    app = create_app(upstream_client=upstream)
    async with _client(app) as client:
        preflight = await client.options("/api/chat")
        wrong_method = await client.get("/api/chat")
        empty = await client.post("/api/chat", json={"message": ""})
        garbage = await client.post("/api/chat", content=b"not json")

    assert preflight.status_code == 200
    assert preflight.json() == {"ok": True}
    assert preflight.headers["access-control-allow-methods"] == "POST, OPTIONS"
    assert wrong_method.status_code == 405
    assert wrong_method.json() == {"error": "Method not allowed"}
    assert empty.status_code == 400
    assert empty.json() == {"error": "No message provided"}
    assert garbage.status_code == 200
    assert garbage.json() == {"reply": ""}
    assert upstream.messages == []


@pytest.mark.asyncio
async def test_healthz():
    app = create_app(upstream_client=FakeUpstreamClient())
    async with _client(app) as client:
        resp = await client.get("/healthz")

    assert resp.json() == {"status": "ok", "scope": "chat-proxy"}
