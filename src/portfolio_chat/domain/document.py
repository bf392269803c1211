from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

CONFIG_SOURCE = "config.js"
# Labels that mark first-party documents regardless of the configured label
TRUSTED_SOURCES = frozenset({"config", CONFIG_SOURCE})


@dataclass(frozen=True)
class Document:
    """A short portfolio document (bio, project, skills, certification).

    Pure structure independent from the object store it was loaded from.
    """

    title: str = ""
    content: str = ""
    source: str = ""

    @classmethod
    def from_mapping(cls, raw: Any) -> Document | None:
        """Coerce a decoded JSON object into a Document; None when it carries no text."""
        if not isinstance(raw, Mapping):
            return None
        title = raw.get("title")
        content = raw.get("content")
        source = raw.get("source")
        doc = cls(
            title="" if title is None else str(title),
            content="" if content is None else str(content),
            source="" if source is None else str(source),
        )
        if not doc.title.strip() and not doc.content.strip():
            return None
        return doc

    def text(self) -> str:
        return f"{self.title} {self.content}"

    def dedup_key(self, prefix_chars: int = 40) -> str:
        return f"{self.title.strip()}::{self.content[:prefix_chars]}"

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "content": self.content, "source": self.source}


@dataclass(frozen=True)
class ScoredDocument(Document):
    score: float = 0.0


@dataclass(frozen=True)
class RetrievalResult:
    context: str = ""
    sources: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.context.strip()


def is_config_sourced(doc: Document, label: str = CONFIG_SOURCE) -> bool:
    """Only first-party documents may answer identity, bio, skills and certification questions."""
    src = doc.source.strip()
    return src == label or src in TRUSTED_SOURCES


def config_documents(docs: list[Document], label: str = CONFIG_SOURCE) -> list[Document]:
    return [d for d in docs if is_config_sourced(d, label)]
