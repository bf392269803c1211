from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from portfolio_chat.core.settings import SiteConfig
from portfolio_chat.domain import patterns as p
from portfolio_chat.domain import replies as r
from portfolio_chat.domain.document import Document, config_documents
from portfolio_chat.domain.intents import (
    ConversationMeta,
    DirectAnswer,
    GenerationPlan,
    Intent,
    RouteResult,
    TemplateKind,
)
from portfolio_chat.domain.language import detect_language
from portfolio_chat.domain.scoring import LexicalScorer, is_greeting_context
from portfolio_chat.domain.text import (
    cap_text,
    ensure_terminal,
    first_sentences,
    split_sentences,
    strip_markdown,
)
from portfolio_chat.infra.prompting.builder import (
    AI_PROJECT_FOCUS,
    MIGRATION_FOCUS,
    PromptParams,
    build_prompt,
)

logger = logging.getLogger(__name__)

Predicate = Callable[[str], bool]
Handler = Callable[[str, list[Document], ConversationMeta], RouteResult | None]

_CERT_TITLE = re.compile(r"^\s*certification\s*:\s*(.+)$", re.IGNORECASE)
_AI_TEXT = re.compile(
    r"\bAI\b|\bML\b|artificial intelligence|machine learning|generative ai|\bIA\b",
    re.IGNORECASE,
)
_BIO_CUES = re.compile(r"\b(?:i\s+am|i'm|my\s+name\s+is|je\s+suis)\b", re.IGNORECASE)
_ABOUT_TITLES = ("about", "summary")
_SKILLS_TITLE = "skills"
_SKILL_SEGMENTS = re.compile(r"[|\n]")
_SKILL_CATEGORY = re.compile(r"^\s*([^,:;()]+):\s*(.*)$")
_SKILL_SPLIT = re.compile(r"[,;]")
_MIGRATION_TERMS = "migration modernization replatform rehost cloud aws azure docker kubernetes"

# Direct intents that take over a message opening with a greeting ("Hi, I want to hire you")
_OVERRIDES_GREETING = frozenset(
    {
        Intent.FAREWELL,
        Intent.ABOUT,
        Intent.AI_CERT,
        Intent.CERT,
        Intent.CONTACT,
        Intent.TEACHING,
        Intent.SKILLS,
    }
)

MAX_SKILLS = 50
ABOUT_CAP = 600
TEACHING_CAP = 600


def bullet_list(items: Sequence[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def certification_name(title: str) -> str | None:
    m = _CERT_TITLE.match(title or "")
    if not m:
        return None
    name = m.group(1).strip()
    return name or None


def parse_skills(content: str) -> list[str]:
    """Skill names from ``Category: a, b | Other: c`` or a flat ``a, b, c`` list.

    A category label is only dropped when it leads a segment or line, so colons
    inside a skill ("AWS (SAA: 2023)") are kept.
    """
    names: list[str] = []
    seen: set[str] = set()
    for segment in _SKILL_SEGMENTS.split(content or ""):
        m = _SKILL_CATEGORY.match(segment)
        body = m.group(2) if m else segment
        for raw in _SKILL_SPLIT.split(body):
            name = raw.strip().strip(".").strip()
            key = name.lower()
            if name and key not in seen:
                seen.add(key)
                names.append(name)
    return names


@dataclass
class IntentRouter:
    """Pick exactly one intent per message, first match in a fixed priority order.

    Direct intents answer from config-sourced documents only. Generative intents
    return a GenerationPlan with a ready prompt; when retrieval finds nothing they
    answer with the no-information message instead, so the generator is never
    called without context.
    """

    site: SiteConfig = field(default_factory=SiteConfig)
    scorer: LexicalScorer = field(default_factory=LexicalScorer)

    def __post_init__(self) -> None:
        self.routes: list[tuple[Intent, Predicate, Handler]] = [
            (Intent.AGENT_NAME, p.is_agent_name_query, self._agent_name),
            (Intent.GREETING, self._greets, self._greeting),
            (Intent.FAREWELL, p.is_farewell, self._farewell),
            (Intent.ABOUT, self._asks_about, self._about),
            (Intent.AI_CERT, p.is_ai_cert_query, self._ai_certifications),
            (Intent.CERT, p.is_cert_query, self._certifications),
            (Intent.CONTACT, p.is_contact_query, self._contact),
            (Intent.TEACHING, p.is_teaching_query, self._teaching),
            (Intent.SKILLS, p.is_skills_query, self._skills),
            (Intent.AI_PROJECT, p.is_ai_project_query, self._ai_projects),
            (Intent.GENERAL, lambda _msg: True, self._general),
        ]

    # ---- public -----------------------------------------------------------
    def route(
        self,
        message: str,
        documents: Sequence[Document] | None,
        meta: ConversationMeta | None = None,
    ) -> RouteResult:
        msg = (message or "").strip()
        meta = meta or ConversationMeta(language=detect_language(msg))
        docs = (
            [d for d in documents if isinstance(d, Document)]
            if isinstance(documents, (list, tuple))
            else []
        )
        for intent, matches, handle in self.routes:
            if not matches(msg):
                continue
            result = handle(msg, docs, meta)
            if result is not None:
                logger.info("Routed to %s (%s)", result.intent.value, type(result).__name__)
                return result
            logger.debug("%s matched but had nothing to answer; falling through", intent.value)
        return self._no_info(Intent.GENERAL, meta)  # pragma: no cover - GENERAL always answers

    def use_rag_for_topic(self, message: str) -> bool:
        return p.mentions_topic(message, self.site.rag_trigger_topics)

    # ---- helpers ----------------------------------------------------------
    def _config_docs(self, docs: list[Document]) -> list[Document]:
        return config_documents(docs, self.site.config_source)

    def _search_scope(self, message: str, docs: list[Document]) -> list[Document]:
        if self.use_rag_for_topic(message):
            return docs
        return self._config_docs(docs)

    def _greets(self, message: str) -> bool:
        """A greeting wins unless it only opens a request another direct intent answers."""
        if not p.is_greeting(message):
            return False
        return not any(
            matches(message)
            for intent, matches, _ in self.routes
            if intent in _OVERRIDES_GREETING
        )

    def _asks_about(self, message: str) -> bool:
        names = [self.site.owner_name, self.site.owner_first_name]
        return p.is_about_query(message, names)

    def _no_info(self, intent: Intent, meta: ConversationMeta) -> DirectAnswer:
        return DirectAnswer(intent, r.reply(r.NO_INFO, meta.language))

    def _plan(
        self,
        intent: Intent,
        kind: TemplateKind,
        context: str,
        message: str,
        meta: ConversationMeta,
        sources: list[str],
        focus: str = "projects",
    ) -> GenerationPlan:
        params = PromptParams(
            kind=kind,
            context=context,
            question=message,
            name=meta.name,
            language=meta.language,
            focus=focus,
            assistant_name=self.site.assistant_name,
            owner_name=self.site.owner_name,
        )
        return GenerationPlan(intent, build_prompt(params), kind, sources)

    # ---- handlers ---------------------------------------------------------
    def _agent_name(self, message: str, docs: list[Document], meta: ConversationMeta) -> RouteResult:
        return DirectAnswer(Intent.AGENT_NAME, self.site.assistant_name)

    def _greeting(self, message: str, docs: list[Document], meta: ConversationMeta) -> RouteResult:
        if meta.name:
            text = r.reply(r.GREETING_NAMED, meta.language, name=meta.name)
        else:
            text = r.reply(r.GREETING, meta.language, assistant=self.site.assistant_name)
        return DirectAnswer(Intent.GREETING, text)

    def _farewell(self, message: str, docs: list[Document], meta: ConversationMeta) -> RouteResult:
        if meta.name:
            return DirectAnswer(Intent.FAREWELL, r.reply(r.FAREWELL_NAMED, meta.language, name=meta.name))
        return DirectAnswer(Intent.FAREWELL, r.reply(r.FAREWELL, meta.language))

    def _about(self, message: str, docs: list[Document], meta: ConversationMeta) -> RouteResult | None:
        config = self._config_docs(docs)
        best: Document | None = None
        for wanted in _ABOUT_TITLES:
            best = next((d for d in config if d.title.strip().lower() == wanted), None)
            if best is not None:
                break
        if best is None:
            bios = [
                d
                for d in config
                if _BIO_CUES.search(d.content) and certification_name(d.title) is None
            ]
            best = max(bios, key=lambda d: len(d.content), default=None)
        if best is None:
            return None

        text = first_sentences(strip_markdown(best.content), 3)
        text = cap_text(text, ABOUT_CAP)
        text = ensure_terminal(first_sentences(text, 2))
        if not text:
            return None
        return DirectAnswer(Intent.ABOUT, text, [best.source])

    def _ai_certifications(self, message: str, docs: list[Document], meta: ConversationMeta) -> RouteResult:
        names: list[str] = []
        for d in self._config_docs(docs):
            name = certification_name(d.title)
            if name and _AI_TEXT.search(f"{d.title} {d.content}") and name not in names:
                names.append(name)
        if not names:
            return self._no_info(Intent.AI_CERT, meta)
        return DirectAnswer(Intent.AI_CERT, bullet_list(names), [self.site.config_source])

    def _certifications(self, message: str, docs: list[Document], meta: ConversationMeta) -> RouteResult | None:
        names: list[str] = []
        for d in self._config_docs(docs):
            name = certification_name(d.title)
            if name and name not in names:
                names.append(name)
        if not names:
            return None
        return DirectAnswer(Intent.CERT, bullet_list(names), [self.site.config_source])

    def _contact(self, message: str, docs: list[Document], meta: ConversationMeta) -> RouteResult:
        return DirectAnswer(
            Intent.CONTACT, r.reply(r.CONTACT, meta.language, url=self.site.contact_url)
        )

    def _teaching(self, message: str, docs: list[Document], meta: ConversationMeta) -> RouteResult | None:
        def _matches(d: Document) -> bool:
            return bool(p.TEACHING_PATTERN.search(d.title) or p.TEACHING_PATTERN.search(d.content))

        candidates = [d for d in self._config_docs(docs) if _matches(d)]
        if not candidates:
            candidates = [d for d in docs if _matches(d)]
        if not candidates:
            return None

        best = max(candidates, key=lambda d: len(d.content))
        sentences = split_sentences(strip_markdown(best.content))
        picked = [s for s in sentences if p.TEACHING_PATTERN.search(s)][:3] or sentences[:3]
        text = ensure_terminal(cap_text(" ".join(picked), TEACHING_CAP))
        if not text:
            return None
        return DirectAnswer(Intent.TEACHING, text, [best.source or best.title])

    def _skills(self, message: str, docs: list[Document], meta: ConversationMeta) -> RouteResult:
        names: list[str] = []
        seen: set[str] = set()
        for d in self._config_docs(docs):
            if d.title.strip().lower() != _SKILLS_TITLE:
                continue
            for name in parse_skills(d.content):
                if name.lower() not in seen:
                    seen.add(name.lower())
                    names.append(name)
        names = names[:MAX_SKILLS]
        if not names:
            return DirectAnswer(Intent.SKILLS, r.reply(r.NO_SKILLS, meta.language))
        return DirectAnswer(Intent.SKILLS, bullet_list(names), [self.site.config_source])

    def _ai_projects(self, message: str, docs: list[Document], meta: ConversationMeta) -> RouteResult:
        result = self.scorer.score(message, self._search_scope(message, docs))
        if result.is_empty or is_greeting_context(result.context):
            return self._no_info(Intent.AI_PROJECT, meta)
        return self._plan(
            Intent.AI_PROJECT,
            TemplateKind.STAR,
            result.context,
            message,
            meta,
            result.sources,
            focus=AI_PROJECT_FOCUS,
        )

    def _general(self, message: str, docs: list[Document], meta: ConversationMeta) -> RouteResult:
        migration = p.is_migration_query(message)
        query = f"{message} {_MIGRATION_TERMS}" if migration else message
        result = self.scorer.score(query, self._search_scope(message, docs))
        if is_greeting_context(result.context):
            if meta.name:
                return DirectAnswer(Intent.GREETING, r.reply(r.GREETING_NAMED, meta.language, name=meta.name))
            return DirectAnswer(Intent.GREETING, r.reply(r.GREETING_SHORT, meta.language))
        if result.is_empty:
            return self._no_info(Intent.GENERAL, meta)
        if migration:
            return self._plan(
                Intent.GENERAL,
                TemplateKind.STAR,
                result.context,
                message,
                meta,
                result.sources,
                focus=MIGRATION_FOCUS,
            )
        return self._plan(
            Intent.GENERAL, TemplateKind.GENERAL, result.context, message, meta, result.sources
        )


__all__ = ["IntentRouter", "bullet_list", "certification_name", "parse_skills"]
