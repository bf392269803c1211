"""Render generation prompts from a typed parameter object.

Builders are pure: the same ``PromptParams`` always yields the same string,
and every free-text input is capped so the prompt size stays bounded.
"""

from __future__ import annotations

from dataclasses import dataclass

from portfolio_chat.domain.intents import TemplateKind
from portfolio_chat.domain.language import normalize_language
from portfolio_chat.domain.text import collapse_ws
from portfolio_chat.infra.prompting.templates import (
    FALLBACK_PHRASE,
    GENERAL_TEMPLATE,
    LANGUAGE_NAMES,
    STAR_TEMPLATE,
)

MAX_CONTEXT_CHARS = 1500
MAX_QUESTION_CHARS = 500
MAX_NAME_CHARS = 60

DEFAULT_FOCUS = "projects"
MIGRATION_FOCUS = "cloud migration and modernization experience"
AI_PROJECT_FOCUS = "AI and machine learning projects"


@dataclass(frozen=True)
class PromptParams:
    kind: TemplateKind
    context: str
    question: str
    name: str | None = None
    language: str = "en"
    focus: str = DEFAULT_FOCUS
    assistant_name: str = "Sensei"
    owner_name: str = "the portfolio owner"


def _visitor_line(name: str | None) -> str:
    n = collapse_ws(name or "")[:MAX_NAME_CHARS]
    return f" {n}" if n else " (name unknown)"


def build_prompt(params: PromptParams) -> str:
    template = STAR_TEMPLATE if params.kind == TemplateKind.STAR else GENERAL_TEMPLATE
    lang = normalize_language(params.language)
    return template.format(
        assistant_name=params.assistant_name,
        owner_name=params.owner_name,
        fallback=FALLBACK_PHRASE,
        language_name=LANGUAGE_NAMES[lang],
        context=(params.context or "").strip()[:MAX_CONTEXT_CHARS],
        question=collapse_ws(params.question)[:MAX_QUESTION_CHARS],
        visitor=_visitor_line(params.name),
        focus=params.focus or DEFAULT_FOCUS,
    )
