"""
Serverless entry point for the chat proxy.

Takes an HTTP-style event, answers CORS preflight, validates the chat message,
forwards it to the upstream model and wraps the reply in a JSON response.
Upstream and parsing failures never reach the caller as error statuses: they
are logged and answered with an empty reply so the chat widget keeps working.
"""

from __future__ import annotations

import asyncio
import base64
import json
from typing import Any

import structlog
from pydantic import ValidationError

from .config import Settings, get_settings
from .logging_setup import configure_logging
from .models import ChatRequest, FailureKind, UpstreamResult
from .upstream import UpstreamClient


configure_logging()
log = structlog.get_logger(__name__)

NO_MESSAGE = "No message provided"
METHOD_NOT_ALLOWED = "Method not allowed"


def cors_headers(settings: Settings) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": settings.allowed_origin,
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": "POST, OPTIONS",
    }


def build_response(status_code: int, body: dict[str, Any], settings: Settings) -> dict[str, Any]:
    """Wrap ``body`` into a gateway-compatible response with CORS headers."""
    return {
        "statusCode": status_code,
        "headers": cors_headers(settings),
        "body": json.dumps(body),
    }


def _event_method(event: dict[str, Any]) -> str:
    method = event.get("httpMethod") or event.get("method")
    if not method:
        context = event.get("requestContext")
        http = context.get("http") if isinstance(context, dict) else None
        method = http.get("method") if isinstance(http, dict) else None
    return str(method or "").upper()


def _load_body(event: dict[str, Any]) -> Any:
    """Decode the event body into JSON data; raises ValueError when it cannot."""
    body = event.get("body")
    if body is None or body == "":
        return {}
    if not isinstance(body, (str, bytes)):
        # Some local invokers hand over the body already decoded.
        return body
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body, validate=True)
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return json.loads(body)


def _chat_message(data: Any) -> str:
    if not isinstance(data, dict):
        return ""
    try:
        return ChatRequest.model_validate(data).message
    except ValidationError:
        return ""


def _failure_response(result: UpstreamResult, settings: Settings, request_log) -> dict[str, Any]:
    # Every failure kind gets the same answer: an empty reply with status 200.
    request_log.warning(
        "request.failed",
        failure=result.failure.value if result.failure else None,
        detail=result.detail,
    )
    return build_response(200, {"reply": ""}, settings)


async def _dispatch(
    method: str,
    event: dict[str, Any],
    upstream: UpstreamClient,
    settings: Settings,
    request_log,
) -> dict[str, Any]:
    if method == "OPTIONS":
        return build_response(200, {"ok": True}, settings)
    if method != "POST":
        return build_response(405, {"error": METHOD_NOT_ALLOWED}, settings)

    try:
        data = _load_body(event)
    except ValueError as exc:
        result = UpstreamResult.failed(
            FailureKind.BAD_REQUEST_BODY, f"{type(exc).__name__}: {exc}"
        )
        return _failure_response(result, settings, request_log)

    request_log.info("request.body", body=data)

    message = _chat_message(data)
    if not message:
        return build_response(400, {"error": NO_MESSAGE}, settings)

    result = await upstream.complete(message, settings.system_prompt)
    if not result.ok:
        return _failure_response(result, settings, request_log)
    return build_response(200, {"reply": result.text}, settings)


async def handle_event(
    event: Any,
    upstream: UpstreamClient,
    settings: Settings,
    request_id: str | None = None,
) -> dict[str, Any]:
    """Turn one inbound event into an outbound response. Never raises."""
    if not isinstance(event, dict):
        event = {}
    method = _event_method(event)
    request_log = log.bind(method=method, request_id=request_id)
    request_log.info("request.received")

    try:
        response = await _dispatch(method, event, upstream, settings, request_log)
    except Exception as exc:
        request_log.exception("request.unhandled_error")
        result = UpstreamResult.failed(
            FailureKind.INTERNAL, f"{type(exc).__name__}: {exc}"
        )
        response = _failure_response(result, settings, request_log)

    request_log.info("response.sent", status=response["statusCode"])
    return response


def lambda_handler(event: dict[str, Any] | None, context: Any = None) -> dict[str, Any]:
    """Synchronous entry point for serverless hosts."""
    settings = get_settings()
    upstream = UpstreamClient.from_settings(settings)
    request_id = getattr(context, "aws_request_id", None)
    return asyncio.run(handle_event(event, upstream, settings, request_id=request_id))
