from __future__ import annotations

import re

_WS = re.compile(r"\s+", re.UNICODE)
_WORD = re.compile(r"[^\W_]+", re.UNICODE)
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")

_FENCED_BLOCK = re.compile(r"```.*?```", re.DOTALL)
_OPEN_FENCE = re.compile(r"```.*", re.DOTALL)
_HEADING = re.compile(r"^\s{0,3}#{1,6}\s*", re.MULTILINE)
_BLOCKQUOTE = re.compile(r"^\s*>+\s?", re.MULTILINE)
_RULE = re.compile(r"^\s*(?:[-*_]\s*){3,}$", re.MULTILINE)
_TABLE_DIVIDER = re.compile(r"^\s*\|?(?:\s*:?-{2,}:?\s*\|)+\s*:?-*:?\s*$", re.MULTILINE)
_BULLET = re.compile(r"^\s*(?:[-*+•]|\d+[.)])\s+", re.MULTILINE)
_IMAGE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_LINK = re.compile(r"\[([^\]]+)\]\([^)]*\)")
_STRONG = re.compile(r"(\*\*|__)(.+?)\1")
_EMPHASIS = re.compile(r"(?<!\w)([*_])(?!\s)([^*_\n]+?)(?<!\s)\1(?!\w)")
_STRAY_STARS = re.compile(r"\*+")
_INLINE_RULE = re.compile(r"(?:^|\s)-{3,}(?=\s|$)")
_SPACE_BEFORE_PUNCT = re.compile(r"\s+([.,!?;:])")


def collapse_ws(s: str) -> str:
    return _WS.sub(" ", s or "").strip()


def tokenize(s: str) -> list[str]:
    """Lowercased word tokens split on non-alphanumeric boundaries."""
    return _WORD.findall((s or "").lower())


def split_sentences(s: str) -> list[str]:
    parts = _SENTENCE_BOUNDARY.split((s or "").strip())
    return [p.strip() for p in parts if p.strip()]


def strip_code(s: str) -> str:
    """Drop fenced code blocks (an unterminated fence drops the rest) and inline backticks."""
    t = _FENCED_BLOCK.sub(" ", s or "")
    t = _OPEN_FENCE.sub(" ", t)
    return t.replace("`", "")


def strip_markdown(s: str) -> str:
    """Flatten Markdown structure into single-spaced plain text."""
    t = s or ""
    t = _TABLE_DIVIDER.sub(" ", t)
    t = _RULE.sub(" ", t)
    t = _HEADING.sub("", t)
    t = _BLOCKQUOTE.sub("", t)
    t = _BULLET.sub("", t)
    t = _IMAGE.sub(r"\1", t)
    t = _LINK.sub(r"\1", t)
    t = _STRONG.sub(r"\2", t)
    t = _EMPHASIS.sub(r"\2", t)
    t = _STRAY_STARS.sub("", t)
    t = t.replace("|", " ")
    t = " ".join(line.strip() for line in t.splitlines() if line.strip())
    t = _INLINE_RULE.sub(" ", t)
    return tidy(t)


def tidy(s: str) -> str:
    """Collapse whitespace, pull stray spaces off punctuation, trim leading separators."""
    t = collapse_ws(s)
    t = _SPACE_BEFORE_PUNCT.sub(r"\1", t)
    t = re.sub(r"([.!?])(?:\s*\.)+", r"\1", t)
    return t.lstrip(" ,;:-–—").strip()


def ensure_terminal(s: str) -> str:
    t = (s or "").rstrip()
    if not t:
        return ""
    if t[-1] in ".!?…":
        return t
    return t + "."


def cap_text(s: str, limit: int) -> str:
    """Cut to at most ``limit`` characters on a word boundary, keeping a terminal mark."""
    t = (s or "").strip()
    if len(t) <= limit:
        return t
    cut = t[: limit - 1].rstrip()
    if not t[limit - 1].isspace() and " " in cut:
        cut = cut.rsplit(" ", 1)[0]
    cut = cut.rstrip(" ,;:-–—\"'`")
    return ensure_terminal(cut)


def first_sentences(s: str, n: int) -> str:
    return " ".join(split_sentences(s)[: max(0, n)])
