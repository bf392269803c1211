from __future__ import annotations

from collections.abc import Iterable

from portfolio_chat.domain.document import Document
from portfolio_chat.domain.text import split_sentences

CONTEXT_DELIMITER = "\n---\n"
MAX_CONTEXT_CHARS = 1500
FALLBACK_SNIPPET_CHARS = 400


def relevant_snippet(
    doc: Document,
    want: Iterable[str],
    *,
    fallback_chars: int = FALLBACK_SNIPPET_CHARS,
) -> str:
    """Sentences of ``doc.content`` mentioning any wanted term, else its opening characters."""
    terms = [w for w in want if len(w) > 1]
    matched = [
        s for s in split_sentences(doc.content) if any(w in s.lower() for w in terms)
    ]
    if matched:
        return " ".join(matched)
    return (doc.content or "")[:fallback_chars]


def assemble_context(
    docs: Iterable[Document],
    want: Iterable[str],
    *,
    delimiter: str = CONTEXT_DELIMITER,
    limit: int = MAX_CONTEXT_CHARS,
    fallback_chars: int = FALLBACK_SNIPPET_CHARS,
) -> str:
    """Join one snippet per document and hard-truncate the result to ``limit`` characters."""
    terms = list(want)
    pieces = [relevant_snippet(d, terms, fallback_chars=fallback_chars) for d in docs]
    context = delimiter.join(pieces)
    return context[:limit]
