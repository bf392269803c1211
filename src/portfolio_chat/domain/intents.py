from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Intent(str, Enum):
    GREETING = "greeting"
    FAREWELL = "farewell"
    AGENT_NAME = "agent_name"
    ABOUT = "about"
    AI_CERT = "ai_cert"
    CERT = "cert"
    CONTACT = "contact"
    TEACHING = "teaching"
    SKILLS = "skills"
    AI_PROJECT = "ai_project"
    GENERAL = "general"


class TemplateKind(str, Enum):
    STAR = "star"
    GENERAL = "general"


@dataclass(frozen=True)
class ConversationMeta:
    """Per-request metadata sent by the client; nothing is kept server side."""

    name: str | None = None
    language: str = "en"


@dataclass(frozen=True)
class DirectAnswer:
    """Reply built from structured documents or fixed text; never sanitized."""

    intent: Intent
    message: str
    sources: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class GenerationPlan:
    intent: Intent
    prompt: str
    template: TemplateKind = TemplateKind.GENERAL
    sources: list[str] = field(default_factory=list)


RouteResult = DirectAnswer | GenerationPlan
