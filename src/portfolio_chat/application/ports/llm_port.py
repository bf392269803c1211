from __future__ import annotations

from typing import Protocol


class LLMPort(Protocol):
    """Abstract text-completion interface used for generated replies."""

    def generate(
        self, prompt: str, *, max_tokens: int, temperature: float
    ) -> str:  # pragma: no cover - interface
        ...
