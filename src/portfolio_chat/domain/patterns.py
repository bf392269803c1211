"""Pure string predicates used by the intent router.

Every predicate takes the raw user message and returns a bool, so each can be
unit-tested on its own.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from portfolio_chat.domain.text import collapse_ws

_I = re.IGNORECASE

GREETING_WORDS = (
    "hello",
    "hi",
    "hey",
    "greetings",
    "bonjour",
    "salut",
    "hola",
    "hallo",
    "ciao",
    "yo",
    "good morning",
    "good afternoon",
    "good evening",
    "bonsoir",
)

_AGENT_NAME = re.compile(
    r"\b(?:what\s+is|what'?s|whats)\s+your\s+name\b"
    r"|\byour\s+name\b"
    r"|\bwhat\s+(?:should|can|do)\s+i\s+call\s+you\b"
    r"|\bcomment\s+(?:tu\s+t'?appelles|vous\s+appelez[- ]vous|t'?appelles[- ]tu)\b"
    r"|\bquel\s+est\s+(?:ton|votre)\s+nom\b"
    r"|\b(?:ton|votre)\s+nom\b",
    _I,
)
_QUESTION_WORD = re.compile(
    r"\?"
    r"|\b(?:what|who|whom|whose|how|why|when|where|which|tell|explain|describe|list|"
    r"quoi|qui|comment|pourquoi|quand|où|quel|quelle|quels|quelles|est-ce|pouvez|peux)\b"
    r"|\b(?:can|could|would|will)\s+you\b"
    r"|(?:^|[,.!;]\s*)(?:can|could|would|do|does|did|is|are|have|has)\b",
    _I,
)
_GREETING = re.compile(
    r"\b(?:"
    + "|".join(r"\s+".join(re.escape(p) for p in w.split()) for w in GREETING_WORDS)
    + r")\b",
    _I,
)
_FAREWELL = re.compile(
    r"\b(?:bye|goodbye|good\s+bye|bye[- ]bye|see\s+you|see\s+ya|farewell|take\s+care|"
    r"au\s+revoir|à\s+bientôt|a\s+bientot|à\s+plus|ciao\s+ciao)\b"
    r"|\bthanks?(?:\s+you)?[,!.\s]+(?:and\s+)?(?:good)?bye\b",
    _I,
)
_ABOUT_GENERIC = re.compile(
    r"\bwho\s+(?:is|are)\b"
    r"|\bwho'?s\b"
    r"|\babout\s+(?:you|yourself|the\s+owner|the\s+author|him|her)\b"
    r"|\bintroduce\s+(?:yourself|you)\b"
    r"|\byour\s+(?:background|bio|story)\b"
    r"|\bqui\s+(?:es|êtes|est)\b"
    r"|\bparlez[- ]moi\s+de\s+vous\b",
    _I,
)
_AI = re.compile(
    r"(?<!['’])\b(?:ai|ia|genai|ml|llms?)\b"
    r"|\ba\.i\."
    r"|\bartificial\s+intelligence\b"
    r"|\bintelligence\s+artificielle\b"
    r"|\bmachine\s+learning\b"
    r"|\bgenerative\s+ai\b",
    _I,
)
_CERT = re.compile(
    r"\b(?:certs?|certif\w*|certificat\w*|certified|credentials?)\b",
    _I,
)
_CONTACT = re.compile(
    r"\b(?:contact|reach\s+(?:out|you)|get\s+in\s+touch|hire|hiring|availability|"
    r"available\s+for|freelance|"
    # pricing words only in a hiring frame
    r"how\s+much\s+(?:do|would|will|does)\s+(?:you|it)\s+(?:charge|cost)|"
    r"what\s+do\s+you\s+charge|your\s+(?:rates?|pricing|prices?|fees?)|"
    r"(?:hourly|daily|day|consulting)\s+(?:rates?|fees?)|"
    r"embaucher|recruter|tarifs?|vos\s+prix|disponib\w*|contacter)\b",
    _I,
)
TEACHING_PATTERN = re.compile(
    r"\b(?:teach\w*|instruct(?:or|ors|ing|ion)?|trains?|trainers?|"
    r"training(?!\s+(?:an?\s+|the\s+|my\s+)?(?:models?|data|sets?|pipelines?|jobs?|runs?))|"
    r"mentor\w*|lectur\w*|workshops?|(?<!of\s)courses?|class(?:es|room)?|"
    r"universit(?:y|ies)|academ(?:y|ies)|coach\w*|bootcamps?|enseign\w*|formateur\w*|"
    r"formations?)\b",
    _I,
)
_SKILLS = re.compile(
    r"\b(?:skills?|skillset|stack|tech\s+stack|technolog\w*|tools?|tooling|"
    r"languages?|frameworks?|expertise|proficien\w*|competenc\w*|compétences?|"
    r"outils)\b",
    _I,
)
_PROJECT = re.compile(
    r"\b(?:projects?|projets?|work(?:ed)?|built|build|done|experience|expérience|"
    r"developed|implemented|case\s+stud(?:y|ies)|portfolio|réalisations?)\b",
    _I,
)
_MIGRATION = re.compile(
    r"migrat|moderniz|replatform|rehost|re-architect|move\s+to\s+(?:the\s+)?cloud",
    _I,
)
_MIGRATION_EXAMPLES = re.compile(r"experience|examples", _I)
_MIGRATION_TOPIC = re.compile(r"migrat|move|moderniz|cloud", _I)


def is_agent_name_query(message: str) -> bool:
    return bool(_AGENT_NAME.search(message or ""))


def has_question_word(message: str) -> bool:
    return bool(_QUESTION_WORD.search(message or ""))


def is_greeting(message: str) -> bool:
    """Greeting token present and the message is not also asking something."""
    msg = message or ""
    return bool(_GREETING.search(msg)) and not has_question_word(msg)


def is_farewell(message: str) -> bool:
    return bool(_FAREWELL.search(message or ""))


def is_about_query(message: str, owner_names: Iterable[str] = ()) -> bool:
    msg = collapse_ws(message).lower()
    if not msg:
        return False
    if _ABOUT_GENERIC.search(msg):
        return True
    for name in owner_names:
        n = collapse_ws(name).lower()
        if not n:
            continue
        if re.search(rf"\b(?:about|who\s+is|qui\s+est)\s+{re.escape(n)}\b", msg):
            return True
    return False


def is_ai_query(message: str) -> bool:
    return bool(_AI.search(message or ""))


def is_cert_query(message: str) -> bool:
    return bool(_CERT.search(message or ""))


def is_ai_cert_query(message: str) -> bool:
    return is_ai_query(message) and is_cert_query(message)


def is_contact_query(message: str) -> bool:
    return bool(_CONTACT.search(message or ""))


def is_teaching_query(message: str) -> bool:
    return bool(TEACHING_PATTERN.search(message or ""))


def is_skills_query(message: str) -> bool:
    return bool(_SKILLS.search(message or ""))


def is_project_query(message: str) -> bool:
    return bool(_PROJECT.search(message or ""))


def is_ai_project_query(message: str) -> bool:
    return is_ai_query(message) and is_project_query(message)


def is_migration_query(message: str) -> bool:
    msg = message or ""
    if _MIGRATION.search(msg):
        return True
    return bool(_MIGRATION_EXAMPLES.search(msg) and _MIGRATION_TOPIC.search(msg))


def mentions_topic(message: str, topics: Iterable[str]) -> bool:
    """True when any configured topic appears as a word (prefix) in the message."""
    msg = (message or "").lower()
    for topic in topics:
        t = (topic or "").strip().lower()
        if t and re.search(rf"\b{re.escape(t)}", msg):
            return True
    return False


__all__ = [
    "GREETING_WORDS",
    "TEACHING_PATTERN",
    "has_question_word",
    "is_about_query",
    "is_agent_name_query",
    "is_ai_cert_query",
    "is_ai_project_query",
    "is_ai_query",
    "is_cert_query",
    "is_contact_query",
    "is_farewell",
    "is_greeting",
    "is_migration_query",
    "is_project_query",
    "is_skills_query",
    "is_teaching_query",
    "mentions_topic",
]
