from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _first(seq: Any) -> Any:
    if isinstance(seq, list) and seq:
        return seq[0]
    return None


def extract_generated_text(body: Any) -> str:
    """Pull the generated string out of a provider response body.

    Shapes tried in order: ``results[0].generated_text``, ``generation``,
    ``outputText``, ``completion``, ``choices[0].text`` and the chat-style
    ``choices[0].message.content``. Raw bytes or JSON strings are decoded first.
    Returns "" when nothing usable is found.
    """
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            logger.warning("Generation response is not valid JSON (%d chars)", len(body))
            return ""
    if not isinstance(body, Mapping):
        return ""

    first_result = _first(body.get("results"))
    if isinstance(first_result, Mapping):
        text = _as_text(first_result.get("generated_text")) or _as_text(first_result.get("outputText"))
        if text:
            return text.strip()

    for key in ("generation", "outputText", "completion"):
        text = _as_text(body.get(key))
        if text:
            return text.strip()

    choice = _first(body.get("choices"))
    if isinstance(choice, Mapping):
        text = _as_text(choice.get("text"))
        if not text and isinstance(choice.get("message"), Mapping):
            text = _as_text(choice["message"].get("content"))
        if text:
            return text.strip()
    return ""
