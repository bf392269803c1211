from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from portfolio_chat.domain.document import Document


@dataclass
class DedupConfig:
    enabled: bool = True
    prefix_chars: int = 40


class DuplicateDetector:
    """Deduplicate documents on ``title.strip() + '::' + content[:prefix_chars]``.

    First occurrence wins, so callers control precedence through input order.
    """

    def __init__(self, cfg: DedupConfig | None = None) -> None:
        self.cfg = cfg or DedupConfig()

    def key(self, doc: Document) -> str:
        return doc.dedup_key(int(self.cfg.prefix_chars))

    def unique(self, docs: Iterable[Document]) -> tuple[list[Document], list[Document]]:
        if not self.cfg.enabled:
            return list(docs), []

        kept: list[Document] = []
        skipped: list[Document] = []
        seen: set[str] = set()
        for d in docs:
            k = self.key(d)
            if k in seen:
                skipped.append(d)
                continue
            seen.add(k)
            kept.append(d)
        return kept, skipped
