from __future__ import annotations

from typing import Protocol

from portfolio_chat.domain.document import Document


class DocumentLoaderPort(Protocol):
    def load(self) -> list[Document]:  # pragma: no cover - interface
        ...
