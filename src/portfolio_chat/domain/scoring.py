from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from portfolio_chat.domain.context import (
    CONTEXT_DELIMITER,
    FALLBACK_SNIPPET_CHARS,
    MAX_CONTEXT_CHARS,
    assemble_context,
)
from portfolio_chat.domain.document import Document, RetrievalResult, ScoredDocument
from portfolio_chat.domain.patterns import GREETING_WORDS, TEACHING_PATTERN
from portfolio_chat.domain.text import collapse_ws, tokenize

GREETING_CONTEXT = (
    "This is a greeting. Respond with a warm, friendly welcome and offer to help "
    "with portfolio questions."
)

# Domain terms that boost a document when they appear in its text
HINTS = (
    "certification",
    "certifications",
    "certificate",
    "certified",
    "ai",
    "ml",
    "machine",
    "learning",
    "deep",
    "project",
    "experience",
    "skill",
    "teach",
    "teaching",
    "instructor",
    "trainer",
    "mentoring",
    "mentor",
    "coaching",
    "coach",
    "workshop",
    "bootcamp",
    "class",
    "course",
    "sensei",
    "about",
    "summary",
    "bio",
    "owner",
    "author",
    "portfolio",
)


@dataclass
class ScoringConfig:
    top_k: int = 3
    token_weight: float = 1.0
    stem_weight: float = 0.8
    hint_weight: float = 0.5
    teaching_threshold: float = 1.5
    max_context_chars: int = MAX_CONTEXT_CHARS
    fallback_chars: int = FALLBACK_SNIPPET_CHARS
    delimiter: str = CONTEXT_DELIMITER


def is_greeting_only(message: str) -> bool:
    """Whole message is a greeting: exact, ``"<greeting> ..."`` or ``"... <greeting>"``."""
    msg = collapse_ws(message).lower()
    if not msg:
        return False
    return any(
        msg == g or msg.startswith(g + " ") or msg.endswith(" " + g) for g in GREETING_WORDS
    )


class LexicalScorer:
    """Token and stem overlap ranking over a handful of short documents.

    ``stem`` is injected (Porter stemmer in production); without it only raw
    token overlap and hint boosts contribute.
    """

    def __init__(
        self,
        cfg: ScoringConfig | None = None,
        stem: Callable[[str], str] | None = None,
        extra_hints: Iterable[str] = (),
    ) -> None:
        self.cfg = cfg or ScoringConfig()
        self.stem = stem
        hints = list(HINTS)
        for h in extra_hints:
            h = (h or "").strip().lower()
            if h and h not in hints:
                hints.append(h)
        self.hints: tuple[str, ...] = tuple(hints)
        self._hint_res = [re.compile(rf"\b{re.escape(h)}") for h in self.hints]

    def _stems(self, tokens: Iterable[str]) -> set[str]:
        if self.stem is None:
            return set()
        return {self.stem(t) for t in tokens}

    def score_document(self, q_tokens: Sequence[str], q_stems: Iterable[str], doc: Document) -> float:
        text = doc.text().lower()
        tokens = tokenize(text)
        token_set = set(tokens)
        score = 0.0
        for t in q_tokens:
            if t in token_set:
                score += self.cfg.token_weight
        if self.stem is not None:
            stem_set = self._stems(tokens)
            for s in q_stems:
                if s in stem_set:
                    score += self.cfg.stem_weight
        for rx in self._hint_res:
            if rx.search(text):
                score += self.cfg.hint_weight
        return score

    def rank(self, query: str, docs: Sequence[Document]) -> list[ScoredDocument]:
        """Documents with a positive score, best first; ties keep input order."""
        q_tokens = tokenize(query)
        q_stems = [self.stem(t) for t in q_tokens] if self.stem is not None else []
        scored: list[ScoredDocument] = []
        for d in docs:
            s = self.score_document(q_tokens, q_stems, d)
            if s > 0:
                scored.append(ScoredDocument(title=d.title, content=d.content, source=d.source, score=s))
        # sorted() is stable
        return sorted(scored, key=lambda d: d.score, reverse=True)

    def select(self, query: str, docs: Sequence[Document]) -> list[Document]:
        msg = (query or "").lower()
        ranked = self.rank(msg, docs)
        top: list[Document] = list(ranked[: self.cfg.top_k])

        if not top and "certif" in msg:
            top = [d for d in docs if "certif" in d.content.lower()][: self.cfg.top_k]

        best = ranked[0].score if ranked else 0.0
        if (not ranked or best < self.cfg.teaching_threshold) and TEACHING_PATTERN.search(msg):
            teaching = [
                d for d in docs if TEACHING_PATTERN.search(d.title) or TEACHING_PATTERN.search(d.content)
            ]
            if teaching:
                top = teaching[: self.cfg.top_k]
        return top

    def score(self, query: str, docs: object) -> RetrievalResult:
        if not isinstance(docs, (list, tuple)):
            return RetrievalResult()
        if is_greeting_only(query):
            return RetrievalResult(context=GREETING_CONTEXT, sources=[])

        corpus = [d for d in docs if isinstance(d, Document)]
        top = self.select(query, corpus)
        if not top:
            return RetrievalResult()

        want = list(dict.fromkeys([*tokenize(query), *self.hints]))
        context = assemble_context(
            top,
            want,
            delimiter=self.cfg.delimiter,
            limit=self.cfg.max_context_chars,
            fallback_chars=self.cfg.fallback_chars,
        )
        sources = [s for s in ((d.source or d.title).strip() for d in top) if s]
        return RetrievalResult(context=context, sources=sources)


def is_greeting_context(context: str) -> bool:
    return (context or "").startswith("This is a greeting.")
