from __future__ import annotations

import logging
from dataclasses import dataclass, field

from portfolio_chat.application.ports.llm_port import LLMPort
from portfolio_chat.application.ports.loader_port import DocumentLoaderPort
from portfolio_chat.application.use_cases.route_intent import IntentRouter
from portfolio_chat.domain import replies as r
from portfolio_chat.domain.intents import ConversationMeta, DirectAnswer, Intent, TemplateKind
from portfolio_chat.domain.language import detect_language
from portfolio_chat.infra.prompting.sanitizer import sanitize, sanitize_structured

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatResponse:
    message: str
    intent: Intent
    sources: list[str] = field(default_factory=list)


@dataclass
class ChatUseCase:
    """One chat turn: load corpus -> route -> (generate -> sanitize) -> reply.

    Holds wiring only; every call reloads the documents and keeps no state.
    """

    loader: DocumentLoaderPort
    router: IntentRouter
    llm: LLMPort
    max_tokens: int = 500
    temperature: float = 0.7

    def answer(self, message: str, name: str | None = None) -> ChatResponse:
        msg = (message or "").strip()
        meta = ConversationMeta(name=(name or "").strip() or None, language=detect_language(msg))

        docs = self.loader.load()
        routed = self.router.route(msg, docs, meta)
        if isinstance(routed, DirectAnswer):
            return ChatResponse(routed.message, routed.intent, list(routed.sources))

        raw = self.llm.generate(
            routed.prompt, max_tokens=self.max_tokens, temperature=self.temperature
        )
        if not (raw or "").strip():
            logger.warning("Generator returned no text for intent %s", routed.intent.value)
            raw = r.reply(r.GENERATION_FAILED, meta.language)
            text = sanitize(raw, msg, meta.name, meta.language)
        elif routed.template == TemplateKind.STAR:
            text = sanitize_structured(raw)
        else:
            text = sanitize(raw, msg, meta.name, meta.language)

        if not text:
            text = r.reply(r.NO_INFO, meta.language)
        logger.info("Answered %s from sources %s", routed.intent.value, routed.sources)
        return ChatResponse(text, routed.intent, list(routed.sources))
