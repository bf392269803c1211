from __future__ import annotations

"""API Gateway style Lambda entry point.

Routes:
- ``POST /chat`` with ``{message, name?}`` -> 200 ``{message}``
- ``GET /health`` -> liveness payload, no document or generation work
- ``OPTIONS *`` -> 204 CORS preflight
"""

import base64  # noqa: E402
import binascii  # noqa: E402
import json  # noqa: E402
import logging  # noqa: E402
from collections.abc import Callable, Mapping  # noqa: E402
from datetime import datetime, timezone  # noqa: E402
from typing import Any  # noqa: E402

from portfolio_chat.application.use_cases.answer_chat import ChatUseCase  # noqa: E402
from portfolio_chat.config.composition import get_chat_use_case  # noqa: E402
from portfolio_chat.core.settings import Settings, get_settings  # noqa: E402
from portfolio_chat.logging_setup import setup_logging  # noqa: E402

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


class BadRequest(Exception):
    pass


def _response(status: int, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
    headers = {"Content-Type": "application/json", **CORS_HEADERS}
    body = "" if payload is None else json.dumps(payload, ensure_ascii=False)
    return {"statusCode": status, "headers": headers, "body": body}


def _method(event: Mapping[str, Any]) -> str:
    method = event.get("httpMethod")
    if not method:
        http = (event.get("requestContext") or {}).get("http") or {}
        method = http.get("method")
    return str(method or "POST").upper()


def _path(event: Mapping[str, Any]) -> str:
    return str(event.get("rawPath") or event.get("path") or "/chat")


def parse_body(event: Mapping[str, Any]) -> dict[str, Any]:
    raw = event.get("body")
    if raw is None or raw == "":
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    if event.get("isBase64Encoded"):
        try:
            raw = base64.b64decode(raw).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise BadRequest("Invalid request body") from e
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise BadRequest("Invalid JSON body") from e
    if not isinstance(data, dict):
        raise BadRequest("Invalid JSON body")
    return data


def health(settings: Settings | None = None) -> dict[str, Any]:
    s = settings or get_settings()
    return _response(
        200,
        {
            "status": "ok",
            "region": s.aws_region,
            "modelId": s.model_id,
            "bucket": s.bucket,
            "prefix": s.data_prefix,
            "time": datetime.now(timezone.utc).isoformat(),
        },
    )


def post_chat(
    event: Mapping[str, Any],
    use_case_factory: Callable[[], ChatUseCase] = get_chat_use_case,
) -> dict[str, Any]:
    try:
        body = parse_body(event)
    except BadRequest as e:
        return _response(400, {"error": str(e)})

    message = body.get("message")
    if not isinstance(message, str) or not message.strip():
        return _response(400, {"error": "Missing message"})
    name = body.get("name")
    name = name if isinstance(name, str) else None

    try:
        result = use_case_factory().answer(message, name)
    except Exception as e:  # noqa: BLE001
        logger.exception("Chat request failed")
        return _response(500, {"error": "Internal server error", "details": str(e)})
    return _response(200, {"message": result.message})


def handle_event(
    event: Mapping[str, Any] | None,
    *,
    use_case_factory: Callable[[], ChatUseCase] = get_chat_use_case,
    settings: Settings | None = None,
) -> dict[str, Any]:
    ev = event or {}
    method = _method(ev)
    path = _path(ev).rstrip("/")
    if method == "OPTIONS":
        return _response(204)
    if method == "GET" and path.endswith("/health"):
        return health(settings)
    if method == "POST":
        return post_chat(ev, use_case_factory)
    return _response(404, {"error": "Not found"})


def handler(event: Mapping[str, Any] | None, context: Any = None) -> dict[str, Any]:
    setup_logging(get_settings().log_level)
    return handle_event(event)


__all__ = ["handler", "handle_event", "health", "parse_body", "post_chat"]
