from __future__ import annotations

from portfolio_chat.domain.text import tokenize

SUPPORTED = ("en", "fr")

# Words that are French and never English
_STRONG_FR = {
    "bonjour", "salut", "merci", "vous", "votre", "vos", "quel", "quelle", "quels",
    "quelles", "êtes", "pourquoi", "compétences", "projets", "expérience", "enseignez",
    "parlez", "pouvez", "avez", "revoir", "bientôt", "toi", "moi",
}
# Common French function words; two or more are needed
_WEAK_FR = {
    "le", "la", "les", "des", "une", "un", "est", "et", "avec", "pour", "sur", "mon",
    "je", "tu", "il", "nous", "qui", "que", "quoi", "comment", "du", "au", "aux", "en",
    "ce", "cette", "dans", "ou", "où", "sont",
}


def detect_language(message: str) -> str:
    """Return 'fr' for French input, 'en' otherwise."""
    tokens = tokenize(message)
    if not tokens:
        return "en"
    if any(t in _STRONG_FR for t in tokens):
        return "fr"
    weak = sum(1 for t in tokens if t in _WEAK_FR)
    return "fr" if weak >= 2 else "en"


def normalize_language(lang: str | None) -> str:
    code = (lang or "en").strip().lower()[:2]
    return code if code in SUPPORTED else "en"
