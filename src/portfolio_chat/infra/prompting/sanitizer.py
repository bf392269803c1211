"""Normalize raw generator output into a short, plain-text, URL-free reply.

``sanitize`` runs a fixed sequence of passes and repeats them until the text
stops changing, so applying it twice gives the same result as applying it once.
"""

from __future__ import annotations

import re

from portfolio_chat.domain.language import normalize_language
from portfolio_chat.domain.replies import HELP_TAIL, help_tails, reply
from portfolio_chat.domain.text import (
    cap_text,
    collapse_ws,
    ensure_terminal,
    first_sentences,
    strip_code,
    strip_markdown,
    tidy,
)

MAX_SENTENCES = 2
MAX_CHARS = 400
_MAX_PASSES = 5

_I = re.IGNORECASE

URL_RE = re.compile(r"(?:https?://|www\.)\S+", _I)
_DANGLING_END = re.compile(r"[\s\"'`“”‘’,;:\-–—]+$")

_ACCORDING_TO = re.compile(
    r"\baccording\s+to\s+(?:the\s+)?(?:provided\s+|given\s+)?(?:context|information)\b[,:]?\s*",
    _I,
)
_BASED_ON = re.compile(
    r"\bbased\s+on\s+the\s+(?:provided\s+|given\s+)?(?:context|information)(?:\s+provided)?\b[,:]?\s*",
    _I,
)
_NOTE_CLAUSE = re.compile(r"\bnote\s*(?::|—|-\s)\s*[^.!?]*[.!?]?", _I)
_NO_SOURCE = re.compile(r"\(?\s*no\s+source\s+url\s+(?:is\s+)?provided\s*\.?\s*\)?\.?", _I)
_SELF_CHECK = re.compile(
    r"(?:^|(?<=[.!?])\s)[^.!?]*\b(?:guidelines?|instructions?|rules|requirements)\b[^.!?]*\?",
    _I,
)
_NOTE_LINE = re.compile(r"^\s*note\s*[:\-—].*$", re.IGNORECASE | re.MULTILINE)
_TRAILING_SPACE_NL = re.compile(r"\s+\n")

_LEAD_IN = re.compile(
    r"^(?:you\s+asked\b[^:]{0,200}:|(?:question|answer|response|reply|réponse)\s*:)\s*",
    _I,
)
_GREETING_FLUFF = r"^(?:hi\s+there|hello\s+there|hi|hello|hey|bonjour|salut)\b"

UNCERTAINTY_RE = re.compile(
    r"\bi\s+(?:don['’]t|do\s+not)\s+(?:have|know)\b"
    r"|\bnot\s+sure\b"
    r"|\bno\s+(?:specific\s+)?information\b"
    r"|\b(?:unable\s+to|couldn['’]t|could\s+not)\s+(?:find|generate)\b"
    r"|\bje\s+n['’]ai\s+pas\b"
    r"|\bpas\s+d['’]information"
    r"|\bje\s+ne\s+sais\s+pas\b",
    _I,
)


def strip_urls(text: str) -> str:
    return tidy(URL_RE.sub(" ", text or ""))


def strip_meta(text: str) -> str:
    t = _SELF_CHECK.sub(" ", text or "")
    t = _NO_SOURCE.sub(" ", t)
    t = _ACCORDING_TO.sub("", t)
    t = _BASED_ON.sub("", t)
    t = _NOTE_CLAUSE.sub(" ", t)
    return tidy(t)


def strip_echo(text: str, user_message: str = "", user_name: str | None = None) -> str:
    """Remove a verbatim echo of the question, generic lead-ins and greeting fluff."""
    t = (text or "").strip()
    q = collapse_ws(user_message).rstrip("?!. ")
    if q:
        echo = re.compile(rf"^{re.escape(q)}\s*(?:[?!.:\-–—]+\s*|$)", _I)
        t = echo.sub("", t, count=1)

    fluff_pattern = _GREETING_FLUFF
    name = collapse_ws(user_name or "")
    if name:
        fluff_pattern += rf"(?:\s+{re.escape(name)})?"
    fluff = re.compile(fluff_pattern + r"[!,.\s\-]*", _I)

    while True:
        before = t
        t = _LEAD_IN.sub("", t, count=1)
        t = fluff.sub("", t, count=1)
        t = t.lstrip(" ,;:-–—")
        if t == before:
            break
    return t


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:] if text else text


def _finish(text: str) -> str:
    t = first_sentences(text, MAX_SENTENCES) or text
    t = cap_text(t, MAX_CHARS)
    t = _DANGLING_END.sub("", t)
    return ensure_terminal(t)


def _detach_tail(text: str) -> str:
    t = (text or "").rstrip()
    changed = True
    while changed:
        changed = False
        for tail in help_tails():
            if t.endswith(tail):
                t = t[: -len(tail)].rstrip()
                changed = True
    return t


def _clean(text: str, user_message: str, user_name: str | None) -> str:
    t = _detach_tail(text)
    t = strip_code(t)
    t = strip_markdown(t)
    # an echoed question must not take one of the kept sentences
    t = strip_echo(t, user_message, user_name)
    t = _finish(t)
    t = strip_meta(t)
    t = strip_echo(t, user_message, user_name)
    t = strip_urls(t)
    return _capitalize(_finish(t))


def is_uncertain(text: str) -> bool:
    return bool(UNCERTAINTY_RE.search(text or ""))


def sanitize(
    raw: str,
    user_message: str = "",
    user_name: str | None = None,
    language: str = "en",
) -> str:
    body = raw or ""
    for _ in range(_MAX_PASSES):
        cleaned = _clean(body, user_message, user_name)
        if cleaned == body:
            break
        body = cleaned

    if not body:
        return ""
    if is_uncertain(body) and not any(tail in body for tail in help_tails()):
        body = f"{body} {reply(HELP_TAIL, normalize_language(language))}"
    return body


def sanitize_structured(raw: str) -> str:
    """Clean a STAR reply while keeping its line breaks and field labels."""
    t = strip_code(raw or "")
    t = URL_RE.sub("", t)
    t = _ACCORDING_TO.sub("", t)
    t = _NOTE_LINE.sub("", t)
    t = _TRAILING_SPACE_NL.sub("\n", t)
    return t.strip()


__all__ = [
    "is_uncertain",
    "sanitize",
    "sanitize_structured",
    "strip_echo",
    "strip_meta",
    "strip_urls",
]
