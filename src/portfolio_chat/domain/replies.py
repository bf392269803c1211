"""Fixed, localized replies used when the engine answers without generation."""

from __future__ import annotations

from portfolio_chat.domain.language import normalize_language

NO_INFO = "no_info"
GREETING = "greeting"
GREETING_NAMED = "greeting_named"
GREETING_SHORT = "greeting_short"
FAREWELL = "farewell"
FAREWELL_NAMED = "farewell_named"
CONTACT = "contact"
NO_SKILLS = "no_skills"
HELP_TAIL = "help_tail"
GENERATION_FAILED = "generation_failed"

_REPLIES: dict[str, dict[str, str]] = {
    "en": {
        NO_INFO: (
            "I don't have that specific information in the portfolio context. "
            "Try asking about projects, skills, or certifications."
        ),
        GREETING: (
            "👋 Hi! I'm {assistant}. How can I assist you today? "
            "Before we start, what's your name?"
        ),
        GREETING_NAMED: "👋 Hi {name}! How can I assist you today?",
        GREETING_SHORT: "👋 Hi! How can I assist you today?",
        FAREWELL: "Thanks for stopping by! Feel free to come back anytime.",
        FAREWELL_NAMED: "Thanks for stopping by, {name}! Feel free to come back anytime.",
        CONTACT: (
            "For hiring, rates, or availability, please reach out through the contact "
            "form: {url}"
        ),
        NO_SKILLS: "I couldn't find a skills list in the portfolio yet.",
        HELP_TAIL: "How can I help further?",
        GENERATION_FAILED: "Sorry, I could not generate a response.",
    },
    "fr": {
        NO_INFO: (
            "Je n'ai pas cette information précise dans le contenu du portfolio. "
            "Essayez de poser une question sur les projets, les compétences ou les "
            "certifications."
        ),
        GREETING: (
            "👋 Bonjour ! Je suis {assistant}. Comment puis-je vous aider aujourd'hui ? "
            "Avant de commencer, comment vous appelez-vous ?"
        ),
        GREETING_NAMED: "👋 Bonjour {name} ! Comment puis-je vous aider aujourd'hui ?",
        GREETING_SHORT: "👋 Bonjour ! Comment puis-je vous aider aujourd'hui ?",
        FAREWELL: "Merci de votre visite ! Revenez quand vous voulez.",
        FAREWELL_NAMED: "Merci de votre visite, {name} ! Revenez quand vous voulez.",
        CONTACT: (
            "Pour une embauche, des tarifs ou des disponibilités, utilisez le formulaire "
            "de contact : {url}"
        ),
        NO_SKILLS: "Je n'ai pas encore trouvé de liste de compétences dans le portfolio.",
        HELP_TAIL: "Comment puis-je vous aider davantage?",
        GENERATION_FAILED: "Désolé, je n'ai pas pu générer de réponse.",
    },
}


def reply(key: str, language: str = "en", **values: str) -> str:
    table = _REPLIES[normalize_language(language)]
    return table[key].format(**values) if values else table[key]


def help_tails() -> tuple[str, ...]:
    return tuple(table[HELP_TAIL] for table in _REPLIES.values())
