from __future__ import annotations

from fastapi import FastAPI, Request, Response

from .config import get_settings
from .handler import handle_event
from .logging_setup import configure_logging
from .upstream import UpstreamClient


CHAT_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(upstream_client: UpstreamClient | None = None) -> FastAPI:
    """Serve the serverless handler over plain HTTP for local development."""
    configure_logging()
    settings = get_settings()
    upstream = upstream_client or UpstreamClient.from_settings(settings)
    app = FastAPI()

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok", "scope": "chat-proxy"}

    @app.api_route("/api/chat", methods=CHAT_METHODS)
    async def chat(request: Request):
        raw = await request.body()
        event = {
            "httpMethod": request.method,
            "body": raw.decode("utf-8", errors="replace") if raw else None,
        }
        result = await handle_event(
            event, upstream, settings, request_id=request.headers.get("x-request-id")
        )
        return Response(
            content=result["body"],
            status_code=result["statusCode"],
            headers=result["headers"],
        )

    return app
